"""Question and figure catalog models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Difficulty(StrEnum):
    """Quiz difficulty tiers."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Category(StrEnum):
    """Figure categories."""

    SCIENTIST = "scientist"
    ARTIST = "artist"
    POLITICIAN = "politician"
    INVENTOR = "inventor"
    PHILOSOPHER = "philosopher"
    EXPLORER = "explorer"

    @property
    def display_name(self) -> str:
        return CATEGORY_NAMES[self.value]


CATEGORY_NAMES: dict[str, str] = {
    "scientist": "Scientist",
    "artist": "Artist",
    "politician": "Politician",
    "inventor": "Inventor",
    "philosopher": "Philosopher",
    "explorer": "Explorer",
}

# Categories shown in the statistics breakdown and eligible for master badges
MAIN_CATEGORIES: tuple[str, ...] = (
    Category.SCIENTIST,
    Category.ARTIST,
    Category.POLITICIAN,
    Category.INVENTOR,
    Category.PHILOSOPHER,
)


def category_name(category: str) -> str:
    """Human readable name for a category id, falling back to the id itself."""
    return CATEGORY_NAMES.get(category, category)


class ContentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class Question(ContentModel):
    """A single multiple-choice question linked to a figure."""

    id: str
    category: str
    difficulty: str
    text: str = Field(alias="question")
    options: tuple[str, ...]
    correct_answer: int
    explanation: str = ""
    figure_id: str

    @model_validator(mode="after")
    def _check_correct_answer(self) -> "Question":
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_answer} out of range for {len(self.options)} options"
            )
        return self

    def option_text(self, index: int) -> str | None:
        if 0 <= index < len(self.options):
            return self.options[index]
        return None


class Figure(ContentModel):
    """A historical figure entry in the encyclopedia."""

    id: str
    name: str
    name_en: str = ""
    category: str
    birth: str = ""
    death: str = ""
    country: str = ""
    portrait: str = ""
    description: str = ""
    achievements: tuple[str, ...] = ()
    quotes: tuple[str, ...] = ()
