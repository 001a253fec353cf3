"""Query builders for indexer source SQL.

Query builders generate SQL strings only; executing them and feeding the
indexer belongs to the surrounding tooling.

Architecture:
    - clause_builder.py: joins optional SQL fragments
    - presenter.py: SELECT / GROUP BY forms of fields and attributes
    - associations.py: deduplicated join tree
    - document_id.py: global document id arithmetic
    - sql_builder.py: orchestrates the four source queries
    - factory.py: builder creation

Example:
    >>> from indexsql.query_builder import get_sql_builder
    >>> builder = get_sql_builder(source)
    >>> builder.sql_query_info()
    'SELECT `articles`.* FROM `articles` WHERE `articles`.`id` = ($id - 0) / 1'
"""

from indexsql.query_builder.associations import Associations, JoinNode
from indexsql.query_builder.clause_builder import ClauseBuilder
from indexsql.query_builder.document_id import DocumentIdCodec, decode, encode
from indexsql.query_builder.factory import QueryBuilderFactory, build_queries, get_sql_builder
from indexsql.query_builder.presenter import PropertySQLPresenter
from indexsql.query_builder.sql_builder import SourceQueries, SQLBuilder

__all__ = [
    "ClauseBuilder",
    "PropertySQLPresenter",
    "Associations",
    "JoinNode",
    "DocumentIdCodec",
    "encode",
    "decode",
    "SQLBuilder",
    "SourceQueries",
    "QueryBuilderFactory",
    "get_sql_builder",
    "build_queries",
]
