import enum


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class PostStatus(str, enum.Enum):
    POSTED = "posted"
    WAITLIST = "waitlist"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"
