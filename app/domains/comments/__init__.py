from app.domains.comments.entities import DISLIKE, LANGUAGES, LIKE, Comment, CommentThread

__all__ = ["LANGUAGES", "LIKE", "DISLIKE", "Comment", "CommentThread"]
