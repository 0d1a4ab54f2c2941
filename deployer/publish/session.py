"""Lifecycle of one publish output directory."""

from __future__ import annotations

from enum import Enum, auto

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import discard
from deployer.resources.container import PublishedDirectory

from .plan import PublishLocation
from .policy import PublishingCleanupPolicy

__all__ = ["SessionState", "PublishSession"]


class SessionState(Enum):
    CREATED = auto()
    IN_USE = auto()
    RETIRED = auto()


class PublishSession:
    """Owns a ``PublishLocation`` from publish until cleanup.

    ``CREATED -> IN_USE -> RETIRED``. ``retire()`` is idempotent and only
    removes the directory when the cleanup policy asks for it.
    """

    def __init__(
        self,
        location: PublishLocation,
        policy: PublishingCleanupPolicy,
        console: ConsoleProtocol,
    ) -> None:
        self.location = location
        self._policy = policy
        self._console = console
        self._state = SessionState.CREATED

    @property
    def state(self) -> SessionState:
        return self._state

    def mark_in_use(self) -> Result[None, DeployError]:
        if self._state != SessionState.CREATED:
            return Err(
                DeployError(
                    "configuration",
                    f"Publish session for {self.location.path} is {self._state.name.lower()}",
                )
            )
        self._state = SessionState.IN_USE
        return Ok(None)

    def retire(self) -> Result[None, DeployError]:
        if self._state == SessionState.RETIRED:
            return Ok(None)
        self._state = SessionState.RETIRED

        if not self._policy.remove_publish_directory:
            self._console.debug(f"Keeping publish output at {self.location.path}")
            return Ok(None)

        container = self.location.container
        if isinstance(container, PublishedDirectory):
            removed = container.close()
        else:
            removed = discard(self.location.path, console=self._console)
        if removed:
            self._console.debug(f"Removed publish output {self.location.path}")
        return Ok(None)
