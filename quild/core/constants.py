from enum import Enum


class LessonTypeEnum(str, Enum):
    VIDEO = "video"
    WORKSHOP = "workshop"
    PROJECT = "project"
    READING = "reading"
    QUIZ = "quiz"
    ASSIGNMENT = "assignment"

class ResourceTypeEnum(str, Enum):
    YOUTUBE = "youtube"
    PDF = "pdf"
    NOTION = "notion"
    LINK = "link"
    MEET = "meet"

class WebhookEventEnum(str, Enum):
    USER_CREATED = "user.created"
    USER_UPDATED = "user.updated"

class EventTypeEnum(str, Enum):
    LESSON_COMPLETED = "lesson_completed"
    USER_SYNCED = "user_synced"
    PROGRESS_CREATED = "progress_created"


DEFAULT_LESSON_POINTS = 10
DEFAULT_PHASE_COLOR = "#3B82F6"

# Profile used when the identity provider cannot be reached while mirroring a user.
# The next user.updated webhook overwrites it.
PLACEHOLDER_EMAIL = "temp@example.com"
PLACEHOLDER_FIRST_NAME = "User"
PLACEHOLDER_LAST_NAME = "Name"

ANONYMOUS_DISPLAY_NAME = "Anonymous"

LEADERBOARD_DEFAULT_LIMIT = 10
LEADERBOARD_MAX_LIMIT = 100
DASHBOARD_LEADERBOARD_SIZE = 5
