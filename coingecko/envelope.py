# coingecko/envelope.py
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Envelope:
    """Uniform wrapper for every completed HTTP round-trip."""
    success: bool
    message: str
    code: int
    data: Any

    @classmethod
    def from_status(cls, code: int, message: str, data: Any) -> "Envelope":
        return cls(
            success=200 <= code < 300,
            message=message or "",
            code=code,
            data=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
