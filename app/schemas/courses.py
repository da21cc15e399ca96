from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LessonOutline(BaseModel):
    """Public lesson info; videoUrl is dropped."""
    model_config = ConfigDict(extra="ignore")

    title: str
    duration: str | None = None


class ModuleOutline(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    lessons: list[LessonOutline] = []


class CourseOut(BaseModel):
    """Public catalog metadata (no protected video references)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    slug: str
    title: str
    description: str
    price: int
    original_price: int | None = None
    level: str | None = None
    duration: str | None = None
    lessons: int = 0
    projects: int = 0
    rating: float | None = None
    students: int = 0
    thumbnail: str | None = None
    intro_video_url: str | None = None
    modules: list[ModuleOutline] = []

    @classmethod
    def from_course(cls, course) -> "CourseOut":
        return cls(
            id=course.course_id,
            slug=course.slug,
            title=course.title,
            description=course.description or "",
            price=course.price,
            original_price=course.original_price,
            level=course.level,
            duration=course.duration,
            lessons=course.lessons or 0,
            projects=course.projects or 0,
            rating=course.rating,
            students=course.students or 0,
            thumbnail=course.thumbnail,
            intro_video_url=course.intro_video_url,
            modules=[ModuleOutline.model_validate(m) for m in (course.modules or [])],
        )


class CourseContentOut(BaseModel):
    """Owned content: modules exactly as stored, video URLs included."""
    modules: list[dict[str, Any]]
