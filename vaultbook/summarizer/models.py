"""Summary model - the table of contents handed to renderers."""

from collections.abc import Iterator
from dataclasses import dataclass, field

# Hierarchical chapter index, one entry per nesting level: (2, 1) is "2.1"
Position = tuple[int, ...]


@dataclass
class RawChapter:
    """Unnumbered chapter as produced by a summary strategy."""

    name: str
    path: str
    children: list["RawItem"] = field(default_factory=list)


@dataclass
class RawSection:
    """Unnumbered section heading as produced by a summary strategy."""

    title: str


RawItem = RawChapter | RawSection


@dataclass(frozen=True)
class Chapter:
    """A numbered chapter pointing at a vault file."""

    name: str
    path: str
    position: Position
    subchapters: tuple["Chapter", ...] = ()

    @property
    def number(self) -> str:
        return ".".join(str(n) for n in self.position)

    @property
    def depth(self) -> int:
        return len(self.position)

    def walk(self) -> Iterator["Chapter"]:
        """Yield this chapter and all of its descendants in pre-order."""
        yield self
        for subchapter in self.subchapters:
            yield from subchapter.walk()

    def to_dict(self) -> dict:
        return {
            "type": "chapter",
            "name": self.name,
            "path": self.path,
            "position": list(self.position),
            "subchapters": [c.to_dict() for c in self.subchapters],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Chapter":
        return cls(
            name=data["name"],
            path=data["path"],
            position=tuple(data["position"]),
            subchapters=tuple(cls.from_dict(c) for c in data.get("subchapters", [])),
        )


@dataclass(frozen=True)
class Section:
    """An unnumbered divider between chapters."""

    title: str

    def to_dict(self) -> dict:
        return {"type": "section", "title": self.title}

    @classmethod
    def from_dict(cls, data: dict) -> "Section":
        return cls(title=data["title"])


SummaryItem = Chapter | Section


@dataclass(frozen=True)
class Summary:
    """Complete table of contents of a vault, in document order."""

    items: tuple[SummaryItem, ...] = ()

    def __iter__(self) -> Iterator[SummaryItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def chapters(self) -> list[Chapter]:
        """Top-level chapters."""
        return [item for item in self.items if isinstance(item, Chapter)]

    def sections(self) -> list[Section]:
        return [item for item in self.items if isinstance(item, Section)]

    def walk(self) -> Iterator[Chapter]:
        """Yield every chapter at every depth in pre-order."""
        for chapter in self.chapters():
            yield from chapter.walk()

    def to_dict(self) -> dict:
        return {"items": [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, data: dict) -> "Summary":
        items: list[SummaryItem] = []
        for item in data.get("items", []):
            if item.get("type") == "section":
                items.append(Section.from_dict(item))
            else:
                items.append(Chapter.from_dict(item))
        return cls(items=tuple(items))
