"""
Test grading service
Multiple choice: exact set match, no partial credit
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError as SchemaValidationError

from assessment.config import settings
from assessment.exceptions import AuthError, NotFoundError, ValidationError
from assessment.schemas.grading import AnswerSubmission
from assessment.services.storage import StorageService
from assessment.utils.cache import cache_service
from assessment.utils.diagnostics import Skip, SkipReason
from assessment.utils.identifiers import normalize_id, normalize_ids, same_id, try_normalize_id
from assessment.utils.scoring import is_answer_correct, percentage

logger = logging.getLogger(__name__)


class GradingService:
    """
    Service for grading test submissions

    Strategy:
    - Load the test and all of its questions in one query (cached per test)
    - Match each answer to its question by string id
    - Score against every loaded question, so unanswered ones count as wrong
    """

    MIN_OPTIONS = 2

    def __init__(self, cache=None):
        self.cache = cache if cache is not None else cache_service

    def load_catalog(self, storage: StorageService, test_id: int) -> Dict[str, Any]:
        """
        Load a test with its questions in authoring order

        Args:
            storage: Storage collaborator
            test_id: Canonical test id

        Returns:
            {"test": test_dict, "questions": [question_dict, ...]}

        Raises:
            NotFoundError: if the test does not exist
            ValidationError: if the test references no loadable questions
        """
        cache_key = self.cache.catalog_key(test_id)
        cached = self.cache.get(cache_key)
        if cached:
            return cached

        test = storage.find_by_id("test", test_id)
        if test is None:
            raise NotFoundError(f"Test {test_id} not found")

        question_ids = normalize_ids(test.get("questions"))
        if not question_ids:
            raise ValidationError(f"Test {test_id} has no questions")

        loaded = storage.find_many(
            "question",
            ids=question_ids,
            limit=settings.MAX_TEST_QUESTIONS
        )
        if not loaded:
            raise ValidationError(f"Test {test_id} has no questions")

        if len(loaded) < len(question_ids):
            logger.warning(
                f"Test {test_id} references {len(question_ids)} questions, "
                f"only {len(loaded)} loaded"
            )

        by_id = {question["id"]: question for question in loaded}
        questions = [by_id[q_id] for q_id in question_ids if q_id in by_id]

        catalog = {"test": test, "questions": questions}
        self.cache.set(cache_key, catalog)

        return catalog

    def grade(
        self,
        storage: StorageService,
        user_id: Any,
        test_id: Any,
        answers: Optional[Sequence[Union[AnswerSubmission, Dict[str, Any]]]],
        time_spent: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Grade a submission and persist exactly one result

        Args:
            storage: Storage collaborator
            user_id: Identity resolved by the auth collaborator
            test_id: Raw test id from the submission
            answers: Submitted answers
            time_spent: Total seconds, defaults to the sum of per-answer times

        Returns:
            {"result", "score", "correct_answers", "total_questions",
             "is_passed", "skipped"}

        Raises:
            NotFoundError: if the user or the test does not exist
        """
        if test_id is None or answers is None:
            raise ValidationError("Missing required fields: test_id and answers")

        if user_id is None:
            raise AuthError("Authorization required")

        user_id = normalize_id(user_id, field="user id")
        test_id = normalize_id(test_id, field="test id")
        answers = self._coerce_answers(answers)

        if storage.find_by_id("user", user_id) is None:
            raise NotFoundError(f"User {user_id} not found")

        catalog = self.load_catalog(storage, test_id)
        test = catalog["test"]
        questions = catalog["questions"]

        graded, skipped = self.grade_answers(questions, answers)

        total_questions = len(questions)
        correct_answers = sum(1 for answer in graded if answer["is_correct"])
        score = percentage(correct_answers, total_questions)

        passing_score = test.get("passing_score")
        if passing_score is None:
            passing_score = settings.DEFAULT_PASSING_SCORE
        is_passed = score >= passing_score

        if time_spent is None:
            time_spent = sum(answer.time_spent for answer in answers)

        result = storage.create("result", {
            "user_id": user_id,
            "test_id": test_id,
            "answers": graded,
            "score": score,
            "total_questions": total_questions,
            "correct_answers": correct_answers,
            "time_spent": time_spent,
            "is_passed": is_passed,
            "completed_at": datetime.now(timezone.utc).replace(tzinfo=None),
        })

        logger.info(
            f"Test {test_id} graded for user {user_id}: {correct_answers}/{total_questions} "
            f"score={score} passed={is_passed} skipped={len(skipped)}"
        )

        return {
            "result": result,
            "score": score,
            "correct_answers": correct_answers,
            "total_questions": total_questions,
            "is_passed": is_passed,
            "skipped": [skip.to_dict() for skip in skipped],
        }

    def grade_answers(
        self,
        questions: List[Dict[str, Any]],
        answers: Sequence[AnswerSubmission]
    ) -> Tuple[List[Dict[str, Any]], List[Skip]]:
        """
        Grade each answer against the loaded questions

        Only the first answer for a question counts. Later ones are skipped.

        Returns:
            Tuple of (graded_answers, skipped)
        """
        graded = []
        skipped = []
        answered = set()

        for answer in answers:
            outcome = self._grade_answer(questions, answer)
            if not isinstance(outcome, Skip):
                if outcome["question"] in answered:
                    outcome = Skip(SkipReason.DUPLICATE_ANSWER, question_id=outcome["question"])
                else:
                    answered.add(outcome["question"])
            if isinstance(outcome, Skip):
                logger.warning(
                    f"Answer skipped: question={answer.question_id} reason={outcome.reason.value}"
                )
                skipped.append(outcome)
            else:
                graded.append(outcome)

        return graded, skipped

    def _grade_answer(
        self,
        questions: List[Dict[str, Any]],
        answer: AnswerSubmission
    ) -> Union[Dict[str, Any], Skip]:
        question = next(
            (q for q in questions if same_id(q["id"], answer.question_id)),
            None
        )
        if question is None:
            return Skip(SkipReason.QUESTION_NOT_FOUND, question_id=answer.question_id)

        options = question.get("options") or []
        if len(options) < self.MIN_OPTIONS:
            return Skip(
                SkipReason.TOO_FEW_OPTIONS,
                question_id=question["id"],
                detail=f"{len(options)} option(s)"
            )

        selected = list(answer.selected_options)

        return {
            "question": try_normalize_id(question["id"]),
            "selected_options": [{"option_index": index} for index in selected],
            "is_correct": is_answer_correct(options, selected),
            "time_spent": answer.time_spent or 0,
        }

    def _coerce_answers(self, answers) -> Tuple[AnswerSubmission, ...]:
        """Accept parsed submissions or raw payload dicts"""
        if isinstance(answers, (str, bytes, dict)):
            raise ValidationError("answers must be a list")

        try:
            return tuple(
                answer if isinstance(answer, AnswerSubmission)
                else AnswerSubmission.model_validate(answer)
                for answer in answers
            )
        except TypeError:
            raise ValidationError("answers must be a list")
        except SchemaValidationError as e:
            raise ValidationError(f"Invalid answer: {e.errors()[0].get('msg', 'malformed')}")


# Global instance
grading_service = GradingService()
