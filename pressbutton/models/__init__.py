"""
PressButton – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them
through a single ``import pressbutton.models``.
"""

from pressbutton.models.user import User              # noqa: F401
from pressbutton.models.question import Question      # noqa: F401
from pressbutton.models.vote import Vote              # noqa: F401
from pressbutton.models.comment import Comment        # noqa: F401
