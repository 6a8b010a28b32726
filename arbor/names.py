"""Known first names, used to decide whether a noun phrase names a him or a her."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Union

DATA_DIR = Path(__file__).resolve().parent / "data"
MALE_NAMES_FILE = DATA_DIR / "names_male.txt"
FEMALE_NAMES_FILE = DATA_DIR / "names_female.txt"


def read_word_list(path: Union[str, Path]) -> List[str]:
    """Lower-cased entries of a one-per-line list, skipping blanks and ``#`` comments.

    Raises:
        FileNotFoundError: if the file is missing.
    """
    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"Word list not found: {resolved}")
    entries = []
    with resolved.open("r", encoding="utf-8") as fh:
        for line in fh:
            entry = line.strip()
            if entry and not entry.startswith("#"):
                entries.append(entry.lower())
    return entries


@dataclass(frozen=True)
class NameLists:
    male: FrozenSet[str] = field(default_factory=frozenset)
    female: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_names(cls, male: Iterable[str] = (), female: Iterable[str] = ()) -> "NameLists":
        return cls(
            male=frozenset(name.lower() for name in male),
            female=frozenset(name.lower() for name in female),
        )

    @classmethod
    def load(
        cls,
        male_path: Optional[Union[str, Path]] = None,
        female_path: Optional[Union[str, Path]] = None,
    ) -> "NameLists":
        """Read both lists; paths default to the bundled data files."""
        return cls(
            male=frozenset(read_word_list(male_path or MALE_NAMES_FILE)),
            female=frozenset(read_word_list(female_path or FEMALE_NAMES_FILE)),
        )

    def is_male(self, word: str) -> bool:
        return word.lower() in self.male

    def is_female(self, word: str) -> bool:
        return word.lower() in self.female


__all__ = ["NameLists", "read_word_list"]
