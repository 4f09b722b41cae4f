"""
Catalog caching around grading.
"""
import redis

from assessment.services.grading_service import GradingService
from assessment.utils.cache import CacheService


class FakeRedis:
    """In-memory stand-in for the two commands CacheService uses"""

    def __init__(self, fail=False):
        self.data = {}
        self.ttls = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return self.data.get(key)

    def setex(self, key, ttl, value):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.data[key] = value
        self.ttls[key] = ttl


def cache_with(client):
    cache = CacheService(enabled=False)
    cache.redis_client = client
    return cache


class TestCacheService:

    def test_disabled_cache_is_noop(self):
        cache = CacheService(enabled=False)
        assert cache.set("k", {"a": 1}) is False
        assert cache.get("k") is None

    def test_round_trip_with_ttl(self):
        fake = FakeRedis()
        cache = cache_with(fake)

        assert cache.set("catalog:test:1", {"test": {"id": 1}}, ttl=30) is True
        assert cache.get("catalog:test:1") == {"test": {"id": 1}}
        assert fake.ttls["catalog:test:1"] == 30

    def test_redis_errors_are_swallowed(self):
        cache = cache_with(FakeRedis(fail=True))
        assert cache.set("k", 1) is False
        assert cache.get("k") is None

    def test_catalog_key(self):
        assert CacheService(enabled=False).catalog_key(12) == "catalog:test:12"


class TestCatalogCaching:

    def test_second_grade_uses_cached_catalog(self, storage, make_user, four_question_test, db_session):
        user = make_user()
        test, questions = four_question_test
        fake = FakeRedis()
        service = GradingService(cache=cache_with(fake))
        answers = [{"question_id": q.id, "selected_options": [1]} for q in questions]

        first = service.grade(storage, user.id, test.id, answers)
        assert f"catalog:test:{test.id}" in fake.data

        # Authoring side removes a question; the cached catalog still grades against 4
        db_session.delete(questions[3])
        db_session.commit()

        second = service.grade(storage, user.id, test.id, answers)

        assert first["score"] == second["score"] == 100
        assert second["total_questions"] == 4

    def test_grading_works_when_redis_is_down(self, storage, make_user, four_question_test):
        user = make_user()
        test, questions = four_question_test
        service = GradingService(cache=cache_with(FakeRedis(fail=True)))

        graded = service.grade(storage, user.id, test.id, [{"question_id": questions[0].id, "selected_options": [1]}])

        assert graded["score"] == 25
