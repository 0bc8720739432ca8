"""How a selected entry is displayed."""

from dataclasses import dataclass
from enum import Enum


class ViewType(Enum):
    BROWSER = "browser"
    READER = "reader"


class ReaderViewStyle(Enum):
    DEFAULT = "default"
    DARK = "dark"


@dataclass(frozen=True)
class ViewMode:
    """Browser view shows the link; reader view shows the extracted article text."""

    view_type: ViewType = ViewType.BROWSER
    reader_view_style: ReaderViewStyle = ReaderViewStyle.DEFAULT

    def __str__(self) -> str:
        if self.view_type is ViewType.READER:
            return f"{self.view_type.value} ({self.reader_view_style.value})"
        return self.view_type.value

    def to_dict(self) -> dict:
        return {
            "view_type": self.view_type.value,
            "reader_view_style": self.reader_view_style.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ViewMode":
        return cls(
            view_type=ViewType(data.get("view_type", ViewType.BROWSER.value)),
            reader_view_style=ReaderViewStyle(
                data.get("reader_view_style", ReaderViewStyle.DEFAULT.value)
            ),
        )
