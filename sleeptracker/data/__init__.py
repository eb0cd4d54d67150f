from .database import Database
from .models import SleepNight, QUALITY_LABELS, QUALITY_UNSET
from .repository import Repository

__all__ = ["Database", "SleepNight", "QUALITY_LABELS", "QUALITY_UNSET", "Repository"]
