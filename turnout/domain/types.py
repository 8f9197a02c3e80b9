from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestView:
    path: str
    client_host: str = ""
    accept: str | None = None


@dataclass(frozen=True)
class MaintenanceResponse:
    status_code: int
    content_type: str
    body: bytes
    headers: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "headers",
            {"Content-Type": self.content_type, "Content-Length": str(self.content_length)},
        )

    @property
    def content_length(self) -> int:
        return len(self.body)
