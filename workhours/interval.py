from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Interval:
    start: float
    end: float

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Interval start ({self.start}) must be <= end ({self.end})"
            )

    @property
    def duration(self) -> float:
        return self.end - self.start

    def __str__(self) -> str:
        """Human-friendly string showing range and duration."""
        return f"Interval({self.start}→{self.end}, {self.duration}s)"
