"""Weight tracking: models, calculations, persistence and user operations."""

from .calculations import (
    calculate_bmi,
    calculate_goal_progress,
    calculate_remaining_weight,
    calculate_stats,
    calculate_weight_trend,
    get_bmi_category,
)
from .forms import SettingsForm, WeightGoalForm, WeightRecordForm
from .models import (
    SCHEMA_VERSION,
    ChartPoint,
    Settings,
    Theme,
    TimePeriod,
    Trend,
    WeightDocument,
    WeightGoal,
    WeightRecord,
    WeightStats,
)
from .service import Dashboard, GoalStatus, WeightTracker
from .store import WeightStore

__all__ = [
    "SCHEMA_VERSION",
    "ChartPoint",
    "Dashboard",
    "GoalStatus",
    "Settings",
    "SettingsForm",
    "Theme",
    "TimePeriod",
    "Trend",
    "WeightDocument",
    "WeightGoal",
    "WeightGoalForm",
    "WeightRecord",
    "WeightRecordForm",
    "WeightStats",
    "WeightStore",
    "WeightTracker",
    "calculate_bmi",
    "calculate_goal_progress",
    "calculate_remaining_weight",
    "calculate_stats",
    "calculate_weight_trend",
    "get_bmi_category",
]
