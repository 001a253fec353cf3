"""Base model for source definitions and generated query bundles."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class IndexSQLBaseModel(BaseModel):
    """Frozen pydantic model with JSON-ready serialization.

    A source definition is built once per indexing run and shared
    read-only by every builder working on it, possibly from several
    threads, so instances are immutable.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary with enums as their values and unset optionals dropped.

        Example:
            >>> DeltaConfiguration(type=DeltaType.TIMESTAMP).to_dict()
            {'type': 'timestamp', 'threshold': 86400}
        """
        return self.model_dump(mode="json", exclude_none=True)
