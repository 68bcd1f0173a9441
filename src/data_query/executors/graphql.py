"""GraphQL executor."""

from typing import Any

from data_query.entities import QueryProtocol, RequestDescriptor
from data_query.errors import ExecutionError

from .base import BaseExecutor


class GraphQLExecutor(BaseExecutor):
    """POSTs a ``{query, variables}`` envelope and decodes the JSON reply."""

    protocol = QueryProtocol.GRAPHQL.value
    label = "GraphQL"

    async def execute(self, descriptor: RequestDescriptor) -> Any:
        if not descriptor.query:
            raise ExecutionError("Query is required for GraphQL queries")

        variables = descriptor.variables.to_value()
        envelope = {
            "query": descriptor.query,
            "variables": variables if variables is not None else {},
        }
        return await self.post_json(descriptor, "POST", envelope)
