"""
Statistics service for the user dashboard
"""
import logging
from typing import Any, Dict, List, Optional

from assessment.config import settings
from assessment.exceptions import AuthError, NotFoundError
from assessment.services.storage import StorageService
from assessment.utils.diagnostics import Skip, SkipReason
from assessment.utils.feedback import collect_feedback, selected_index
from assessment.utils.identifiers import extract_ref, normalize_id, normalize_ids, try_normalize_id
from assessment.utils.scoring import round_half_up

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown"
UNKNOWN = "unknown"


class StatsService:
    """Service for rebuilding a user's performance from their result history"""

    def compute_stats(self, storage: StorageService, user_id: Any) -> Dict[str, Any]:
        """
        Get aggregate performance for a user

        Missing tests or questions referenced by old results never fail the
        call; they fall back to placeholders and are listed in diagnostics.

        Args:
            storage: Storage collaborator
            user_id: Identity resolved by the auth collaborator

        Returns:
            Dictionary matching the UserStats schema
        """
        if user_id is None:
            raise AuthError("Authorization required")

        user_id = normalize_id(user_id, field="user id")

        user = storage.find_by_id("user", user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        results = storage.find_many(
            "result",
            where={"user_id": user_id},
            sort="-completed_at",
            limit=settings.STATS_RESULTS_LIMIT
        )

        test_ids = normalize_ids(result.get("test") for result in results)
        tests = storage.find_many("test", ids=test_ids, limit=settings.STATS_RESULTS_LIMIT)
        tests_map = {test["id"]: test for test in tests}

        diagnostics: List[Skip] = []

        total_tests = len(results)
        passed_tests = sum(1 for result in results if result.get("is_passed"))
        if total_tests:
            average_score = round_half_up(
                sum(result.get("score") or 0 for result in results) / total_tests
            )
        else:
            average_score = 0
        total_time_spent = sum(result.get("time_spent") or 0 for result in results)

        category_stats = self._calculate_category_stats(results, tests_map, diagnostics)
        recent_results = self._build_recent_results(
            storage,
            results[:settings.RECENT_RESULTS_LIMIT],
            tests_map,
            diagnostics
        )

        if diagnostics:
            logger.warning(f"Stats for user {user_id} degraded: {len(diagnostics)} unresolved reference(s)")

        return {
            "total_tests": total_tests,
            "passed_tests": passed_tests,
            "average_score": average_score,
            "total_time_spent": total_time_spent,
            "category_stats": category_stats,
            "recent_results": recent_results,
            "diagnostics": [skip.to_dict() for skip in diagnostics],
        }

    def _calculate_category_stats(
        self,
        results: List[Dict[str, Any]],
        tests_map: Dict[int, Dict[str, Any]],
        diagnostics: List[Skip]
    ) -> List[Dict[str, Any]]:
        """Average score per test category, in first-seen order"""

        categories: Dict[str, Dict[str, int]] = {}

        for result in results:
            test_id = try_normalize_id(result.get("test"))
            test = tests_map.get(test_id)
            if not test or not test.get("category"):
                diagnostics.append(Skip(
                    SkipReason.TEST_NOT_FOUND,
                    result_id=result.get("id"),
                    test_id=extract_ref(result.get("test"))
                ))
                continue

            bucket = categories.setdefault(test["category"], {"tests": 0, "total_score": 0})
            bucket["tests"] += 1
            bucket["total_score"] += result.get("score") or 0

        return [
            {
                "category": category,
                "tests": data["tests"],
                "average_score": round_half_up(data["total_score"] / data["tests"]),
            }
            for category, data in categories.items()
        ]

    def _build_recent_results(
        self,
        storage: StorageService,
        results: List[Dict[str, Any]],
        tests_map: Dict[int, Dict[str, Any]],
        diagnostics: List[Skip]
    ) -> List[Dict[str, Any]]:
        """Enrich the newest results with test details and per-answer feedback"""

        question_ids = normalize_ids(
            answer.get("question")
            for result in results
            for answer in self._answers(result)
        )
        questions = storage.find_many(
            "question",
            ids=question_ids,
            limit=settings.STATS_QUESTIONS_LIMIT
        )
        questions_map = {question["id"]: question for question in questions}

        recent = []
        for result in results:
            test_ref = extract_ref(result.get("test"))
            test = tests_map.get(try_normalize_id(test_ref)) or {}

            answers = [
                self._enrich_answer(answer, questions_map, result.get("id"), diagnostics)
                for answer in self._answers(result)
            ]

            recent.append({
                "id": str(result.get("id")),
                "test": {
                    "id": str(test.get("id") or test_ref or UNKNOWN),
                    "title": test.get("title") or UNKNOWN_TITLE,
                    "category": test.get("category") or UNKNOWN,
                    "difficulty": test.get("difficulty") or UNKNOWN,
                },
                "score": result.get("score") or 0,
                "correct_answers": result.get("correct_answers") or 0,
                "total_questions": result.get("total_questions") or 0,
                "time_spent": result.get("time_spent") or 0,
                "is_passed": bool(result.get("is_passed")),
                "completed_at": result.get("completed_at"),
                "answers": answers,
            })

        return recent

    def _enrich_answer(
        self,
        answer: Dict[str, Any],
        questions_map: Dict[int, Dict[str, Any]],
        result_id: Optional[int],
        diagnostics: List[Skip]
    ) -> Dict[str, Any]:
        question_ref = extract_ref(answer.get("question"))
        question_id = try_normalize_id(question_ref)
        is_correct = bool(answer.get("is_correct"))
        raw_selected = answer.get("selected_options") or []
        selected = self._selected_options(raw_selected)

        degraded = {
            "question_id": question_id,
            "is_correct": is_correct,
            "selected_options": selected,
            "feedback": None,
        }

        if question_id is None:
            diagnostics.append(Skip(
                SkipReason.INVALID_REFERENCE,
                question_id=question_ref,
                result_id=result_id
            ))
            return degraded

        question = questions_map.get(question_id)
        if question is None:
            diagnostics.append(Skip(
                SkipReason.QUESTION_NOT_FOUND,
                question_id=question_id,
                result_id=result_id
            ))
            return degraded

        feedback, out_of_range = collect_feedback(question.get("options"), raw_selected, is_correct)
        for entry in out_of_range:
            diagnostics.append(Skip(
                SkipReason.OPTION_OUT_OF_RANGE,
                question_id=question_id,
                result_id=result_id,
                detail=f"option {entry!r}"
            ))

        return {
            "question_id": question_id,
            "question": {
                "id": str(question["id"]),
                "question_title": question.get("question_title") or "Question",
                "question": question.get("question"),
            },
            "is_correct": is_correct,
            "selected_options": selected,
            "time_spent": answer.get("time_spent") or 0,
            "feedback": feedback or None,
            "explanation": question.get("explanation") or None,
        }

    def _answers(self, result: Dict[str, Any]) -> List[Dict[str, Any]]:
        answers = result.get("answers")
        if not isinstance(answers, list):
            return []
        return [answer for answer in answers if isinstance(answer, dict)]

    def _selected_options(self, raw_selected: Any) -> List[Dict[str, int]]:
        """Normalize stored selections to [{"option_index": n}], dropping unreadable ones"""
        if not isinstance(raw_selected, list):
            return []

        return [
            {"option_index": index}
            for index in (selected_index(entry) for entry in raw_selected)
            if index is not None
        ]


# Global instance
stats_service = StatsService()
