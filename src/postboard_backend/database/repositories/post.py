"""Repository helpers for working with posts."""

from postboard_backend.database.repositories.base import SqlAlchemyRepository
from postboard_backend.database.schemas import PostSchema


class PostRepository(SqlAlchemyRepository[PostSchema]):
    """Encapsulates persistence operations for :class:`PostSchema`."""

    schema = PostSchema

    def find_by_user_id(self, user_id: int) -> list[PostSchema]:
        """Return posts owned by *user_id*."""
        return self.find_by(user_id=user_id)

    def find_by_title_containing(self, title: str) -> list[PostSchema]:
        """Return posts whose title contains *title*."""
        return self.find_where([PostSchema.title.contains(title, autoescape=True)])

    def find_by_content_containing(self, content: str) -> list[PostSchema]:
        """Return posts whose content contains *content*."""
        return self.find_where([PostSchema.content.contains(content, autoescape=True)])

    def find_by_title_and_content_containing(
        self, title: str, content: str
    ) -> list[PostSchema]:
        """Return posts whose title and content contain the given fragments."""
        return self.find_where(
            [
                PostSchema.title.contains(title, autoescape=True),
                PostSchema.content.contains(content, autoescape=True),
            ]
        )
