"""Document id encoding.

A full-text index often merges several sources, so every row gets a
document id unique across all of them::

    document_id = primary_key * index_count + offset

Each source owns one residue class modulo ``index_count`` as long as
offsets stay below ``index_count`` and are unique. The forward
transform runs inside the database (it is part of the main query's SELECT
list); the inverse maps the ``$id`` supplied by the indexer back to a
primary key in the lookup query.
"""

from indexsql.common.exceptions import ErrorCode, configuration_error, validation_error
from indexsql.constants import DOCUMENT_ID_PLACEHOLDER
from indexsql.logging import get_logger

logger = get_logger(__name__)


def _check_numbering(index_count: int, offset: int) -> None:
    if isinstance(index_count, bool) or not isinstance(index_count, int) or index_count < 1:
        raise configuration_error(
            f"Index count must be a positive integer, got {index_count!r}",
            config_key="index_count",
            error_code=ErrorCode.CONFIG_INVALID,
        )
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise configuration_error(
            f"Offset must be a non-negative integer, got {offset!r}",
            config_key="offset",
            error_code=ErrorCode.CONFIG_INVALID,
        )


def encode(primary_key: int, index_count: int, offset: int) -> int:
    """Map a primary key to its global document id."""
    _check_numbering(index_count, offset)
    return primary_key * index_count + offset


def decode(document_id: int, index_count: int, offset: int) -> int:
    """Map a global document id back to the source's primary key.

    Raises:
        IndexSQLError: If the id was not produced by this offset
    """
    _check_numbering(index_count, offset)
    primary_key, remainder = divmod(document_id - offset, index_count)
    if remainder:
        raise validation_error(
            f"Document id {document_id} does not belong to offset {offset} of {index_count}",
            field="document_id",
            value=document_id,
            error_code=ErrorCode.INVALID_DOCUMENT_ID,
        )
    return primary_key


class DocumentIdCodec:
    """SQL forms of the document id transform for one source.

    Args:
        index_count: Total number of indices sharing the numbering
        offset: This source's index position, normally
            ``0 <= offset < index_count``

    Raises:
        ConfigurationError: If the numbering is invalid
    """

    def __init__(self, index_count: int, offset: int):
        _check_numbering(index_count, offset)
        if offset >= index_count:
            logger.warning(
                "Offset %d is not below index count %d; its document ids overlap offset %d",
                offset,
                index_count,
                offset % index_count,
            )
        self.index_count = index_count
        self.offset = offset

    def select_expression(self, quoted_primary_key: str, quoted_alias: str) -> str:
        """Forward transform, aliased to the primary key column name."""
        return f"{quoted_primary_key} * {self.index_count} + {self.offset} AS {quoted_alias}"

    def reverse_expression(self) -> str:
        """Inverse transform applied to the indexer's ``$id`` placeholder."""
        return f"({DOCUMENT_ID_PLACEHOLDER} - {self.offset}) / {self.index_count}"

    def encode(self, primary_key: int) -> int:
        return encode(primary_key, self.index_count, self.offset)

    def decode(self, document_id: int) -> int:
        return decode(document_id, self.index_count, self.offset)
