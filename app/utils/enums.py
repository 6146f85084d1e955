"""
String constants for roles and article lifecycle states.
Using plain strings (not Enums) so they compare directly against DB columns.
"""


class UserRole:
    STUDENT = "student"
    AUTHOR = "author"
    ADMIN = "admin"

    ALL = (STUDENT, AUTHOR, ADMIN)


class ArticleStatus:
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    PUBLISHED = "published"
    REJECTED = "rejected"

    ALL = (DRAFT, PENDING, APPROVED, PUBLISHED, REJECTED)

    # States in which the author may still change content or delete
    EDITABLE = (DRAFT, REJECTED)


class UploadBackend:
    LOCAL = "local"
    FIREBASE = "firebase"
