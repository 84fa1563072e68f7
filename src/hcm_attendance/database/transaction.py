from __future__ import annotations

from typing import ContextManager, Protocol


class TransactionManager(Protocol):
    def atomic(self) -> ContextManager[None]:
        """All repository writes issued inside the block commit or roll back together."""

        raise NotImplementedError
