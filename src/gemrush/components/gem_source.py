import itertools
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, MutableSequence, Optional

from gemrush.components.gem import Gem, GemType


@dataclass(slots=True)
class GemSource:
    """Randomness and identity for new gems, stored on the session's registry entity.

    ``rng`` drives gem type selection and shuffles; passing ``seed`` (or a
    seeded ``random.Random``) makes boards reproducible. Ids come from a
    per-source counter so they are unique and predictable in tests.
    """
    rng: random.Random = field(default_factory=random.Random)
    palette: List[GemType] = field(default_factory=lambda: list(GemType))
    seed: Optional[int] = None
    _ids: Iterator[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.seed is not None:
            self.rng.seed(self.seed)
        self.palette = self._filter(self.palette) or list(GemType)
        self._ids = itertools.count(1)

    @staticmethod
    def _filter(types: Iterable[GemType]) -> List[GemType]:
        # Preserve order while dropping duplicates.
        seen: set[GemType] = set()
        filtered: List[GemType] = []
        for gem_type in types:
            if gem_type not in seen:
                filtered.append(gem_type)
                seen.add(gem_type)
        return filtered

    def next_id(self, gem_type: GemType) -> str:
        return f"{gem_type.value}-{next(self._ids)}"

    def random_type(self) -> GemType:
        return self.rng.choice(self.palette)

    def generate_gem(self) -> Gem:
        gem_type = self.random_type()
        return Gem(type=gem_type, id=self.next_id(gem_type))

    def shuffle(self, items: MutableSequence) -> None:
        """In-place uniform permutation (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randrange(i + 1)
            items[i], items[j] = items[j], items[i]
