from collections.abc import MutableMapping
from logging import Logger
from logging import LoggerAdapter
from typing import Any

LoggerLike = Logger | LoggerAdapter


class PrefixLogger(LoggerAdapter):
    """Prefix every message with the owner's repr, evaluated when the message is logged.

    The owner is attached to the record as ``owner`` so handlers can filter on it.
    """

    def __init__(self, logger: LoggerLike, owner: Any) -> None:
        super().__init__(logger, {"owner": owner})
        self.owner = owner

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return f"{self.owner!r} {msg}", kwargs
