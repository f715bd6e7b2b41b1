"""
Course recommendations - the final payload and its terminal rendering.

The questionnaire never computes recommendations; it only renders what the
recommendation service returned. Optional parts of a course card (RMP rating,
matching reviews, fulfilled requirements) are left out when absent or empty.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text


class Recommendation(BaseModel):
    """One recommended course."""

    model_config = ConfigDict(extra="ignore")

    code: str
    title: str
    description: str = ""
    units: float = 0
    department: str = ""
    professor: str = ""
    rmp_rating: float | None = None
    matching_reviews: list[str] = Field(default_factory=list)
    grade_distribution: Any = None
    requirements_fulfilled: list[str] = Field(default_factory=list)

    @field_validator("matching_reviews", "requirements_fulfilled", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


def format_units(units: float) -> str:
    """4.0 -> "4", 2.5 -> "2.5"."""
    return f"{units:g}"


class RecommendationRenderer:
    """Builds rich renderables for the recommendations view. Read-only."""

    title = "Your Personalized Course Recommendations"
    subtitle = "Based on your preferences and AI analysis, here are the best courses for you"

    def render(self, recommendations: list[Recommendation]) -> RenderableType:
        header = Panel(
            Text(self.subtitle, style="dim"),
            title=f"[bold green]✔ {self.title}[/bold green]",
            border_style="green",
        )
        if not recommendations:
            return Group(header, Text("No courses matched your answers.", style="yellow"))
        return Group(header, *(self.render_course(course) for course in recommendations))

    def render_course(self, course: Recommendation) -> Panel:
        body = Text()
        body.append(
            f"{course.department} • {format_units(course.units)} units • Prof. {course.professor}\n",
            style="dim",
        )
        if course.rmp_rating is not None:
            body.append(f"⭐ {course.rmp_rating:g}/5.0 RMP\n", style="yellow")

        if course.description:
            body.append(f"\n{course.description}\n")

        if course.matching_reviews:
            body.append("\nWhy this course matches you:\n", style="bold")
            for review in course.matching_reviews:
                body.append("  • ", style="green")
                body.append(f"{review}\n")

        if course.requirements_fulfilled:
            body.append("\nRequirements fulfilled: ", style="bold")
            body.append(", ".join(course.requirements_fulfilled) + "\n")

        return Panel(
            body,
            title=Text(f"{course.code}: {course.title}", style="bold"),
            subtitle=Text(f"Enroll in {course.code}"),
            title_align="left",
            border_style="blue",
        )
