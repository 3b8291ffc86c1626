"""ORM Models — SQLAlchemy declarative models for all round entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Round, RoundTypeLink and RoundMember are written only by the materializer

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all or alembic autogenerate runs
"""

from roundwatch.models.round_type import RoundType  # noqa: F401
from roundwatch.models.round_config import RoundConfig  # noqa: F401
from roundwatch.models.round_assignment import RoundAssignment  # noqa: F401
from roundwatch.models.round import Round  # noqa: F401
from roundwatch.models.round_type_link import RoundTypeLink  # noqa: F401
from roundwatch.models.round_member import RoundMember  # noqa: F401
