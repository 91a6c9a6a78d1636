from dotenv import load_dotenv  # isort:skip

load_dotenv()  # isort:skip

from surveyhub_core.app.config import settings
from surveyhub_core.app.survey_core import OPTION_BASED_TYPES, QUESTION_TYPES
from surveyhub_core.app.survey_core.constants import TEXT_TYPES
from surveyhub_core.app.survey_core.factories import create_default_question

_known = set(QUESTION_TYPES.keys())

assert set(OPTION_BASED_TYPES) <= _known, set(OPTION_BASED_TYPES) - _known
assert set(TEXT_TYPES) <= _known, set(TEXT_TYPES) - _known
assert set(settings.DISABLED_QUESTION_TYPES) <= _known, (
    set(settings.DISABLED_QUESTION_TYPES) - _known
)

for t in OPTION_BASED_TYPES:
    assert create_default_question(t)["config"]["options"], t

print(f"Checked question types: {sorted(_known)}")
