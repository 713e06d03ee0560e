# Import every model so Base.metadata knows all tables
from townhub.models.school import School  # noqa
from townhub.models.user import Account, Transaction, User  # noqa
from townhub.models.job import Job, JobApplication  # noqa
from townhub.models.plugin import Plugin  # noqa
from townhub.models.game import (  # noqa
    JobChallengeHighScore,
    JobChallengeSession,
    MathGameHighScore,
    MathGameSession,
    WordleSession,
)
from townhub.models.setting import BankSetting  # noqa
