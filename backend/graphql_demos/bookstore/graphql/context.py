"""Per-request GraphQL context carrying the resolved principal and the event bus."""

from strawberry.fastapi import BaseContext

from graphql_demos.bookstore.events import TopicEventBus, event_bus as default_event_bus
from graphql_demos.common.security import Principal


class BookStoreContext(BaseContext):
    def __init__(
        self,
        principal: Principal | None = None,
        event_bus: TopicEventBus | None = None,
    ):
        super().__init__()
        self.principal = principal
        self.event_bus = event_bus or default_event_bus

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None
