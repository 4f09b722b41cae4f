import os

# Must be set before the application modules read settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assessment.database import Base, get_db
from assessment.main import app
from assessment.models import Question, Test, TestResult, User
from assessment.services.storage import StorageService


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def storage(db_session):
    return StorageService(db_session)


@pytest.fixture
def client(db_session):
    """API client sharing the test's database session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def factory(name="Test User"):
        counter["n"] += 1
        user = User(email=f"user{counter['n']}@example.com", name=name)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return factory


@pytest.fixture
def make_question(db_session):
    def factory(correct=(0,), n_options=4, feedback=None, explanation=None, title=None):
        """
        feedback: {option_index: [{"feedback_type": ..., "content": ...}]}
        """
        feedback = feedback or {}
        options = []
        for index in range(n_options):
            option = {"text": f"Option {index}", "is_correct": index in correct}
            if index in feedback:
                option["feedback"] = feedback[index]
            options.append(option)

        question = Question(
            question={"root": {"children": [{"text": "What does this do?"}]}},
            question_title=title,
            category="javascript",
            difficulty="easy",
            options=options,
            explanation=explanation,
        )
        db_session.add(question)
        db_session.commit()
        db_session.refresh(question)
        return question

    return factory


@pytest.fixture
def make_test(db_session):
    def factory(questions, category="javascript", difficulty="easy",
                passing_score=70, title="JavaScript Basics"):
        """questions: Question instances, or raw reference entries stored as-is"""
        refs = [q.id if isinstance(q, Question) else q for q in questions]
        test = Test(
            title=title,
            category=category,
            difficulty=difficulty,
            questions=refs,
            passing_score=passing_score,
            is_active=True,
        )
        db_session.add(test)
        db_session.commit()
        db_session.refresh(test)
        return test

    return factory


@pytest.fixture
def make_result(db_session):
    base_time = datetime(2025, 1, 1, 12, 0, 0)

    def factory(user, test_id, score, answers=None, is_passed=None,
                time_spent=60, minutes_ago=0, total_questions=4):
        result = TestResult(
            user_id=user.id,
            test_id=test_id,
            answers=answers or [],
            score=score,
            total_questions=total_questions,
            correct_answers=round(score * total_questions / 100),
            time_spent=time_spent,
            is_passed=score >= 70 if is_passed is None else is_passed,
            completed_at=base_time - timedelta(minutes=minutes_ago),
        )
        db_session.add(result)
        db_session.commit()
        db_session.refresh(result)
        return result

    return factory


@pytest.fixture
def four_question_test(make_question, make_test):
    """Test with 4 single-correct-answer questions, correct option is index 1"""
    questions = [make_question(correct=(1,)) for _ in range(4)]
    test = make_test(questions)
    return test, questions
