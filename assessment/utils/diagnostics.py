"""
Skip diagnostics for degraded items

Items that cannot be graded or resolved are not errors. They are recorded as
Skip values and returned alongside the successful output.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class SkipReason(str, Enum):
    QUESTION_NOT_FOUND = "question_not_found"
    TOO_FEW_OPTIONS = "too_few_options"
    INVALID_REFERENCE = "invalid_reference"
    TEST_NOT_FOUND = "test_not_found"
    OPTION_OUT_OF_RANGE = "option_out_of_range"
    DUPLICATE_ANSWER = "duplicate_answer"


@dataclass(frozen=True)
class Skip:
    reason: SkipReason
    question_id: Optional[Any] = None
    result_id: Optional[int] = None
    test_id: Optional[Any] = None
    detail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["reason"] = self.reason.value
        return data
