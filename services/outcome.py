from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Outcome:
    """
    Result of a lifecycle operation that may trigger a best-effort cascade.

    `value` is the primary entity. When a secondary effect was attempted,
    `cascade` names it and `cascade_error` says why it failed, so callers can
    tell "fully succeeded" from "primary succeeded, cascade failed".
    """

    value: Any
    message: str
    cascade: Optional[str] = None
    cascade_done: bool = False
    cascade_error: Optional[str] = None

    @property
    def fully_succeeded(self) -> bool:
        return self.cascade_error is None

    def to_dict(self):
        data = {"success": self.message}
        if self.cascade:
            data["cascade"] = {
                "name": self.cascade,
                "done": self.cascade_done,
                "error": self.cascade_error,
            }
        return data
