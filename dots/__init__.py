"""Dots core library — daily questions, day-keyed answers and summaries.

Public API re-exports for convenient imports:
    from dots import Journal, SummaryRange, QuestionType, ...
"""

# Workspace & paths
from dots.workspace import (
    workspace_root,
    load_settings,
    get_user_timezone,
    init_workspace,
    config_path,
    store_dir,
    hooks_config_path,
    log_path,
)

# Errors
from dots.errors import (
    DotsError,
    DecodeError,
    EncodeError,
    InvalidKeyError,
)

# Storage & clock
from dots.store import KeyValueStore, FileStore, MemoryStore
from dots.clock import (
    DayKey,
    Clock,
    SystemClock,
    FixedClock,
    day_key,
    answers_key,
    days_back,
)

# Models
from dots.models import (
    QuestionType,
    Question,
    Answer,
    Settings,
    YesNoStats,
    SliderStats,
    FreeTextStats,
    QuestionSummary,
    Summary,
)

# Engines
from dots.questions import QuestionSet, default_questions, validate_question_text
from dots.answers import DayAnswerStore, DayState, advance_day, is_complete
from dots.summary import SummaryRange, aggregate
from dots.reminder import NotificationScheduler, NullScheduler
from dots.hooks import HookScheduler, run_hooks
from dots.report import render_summary
from dots.journal import Journal, Activation
