"""
Database models package
"""
from assessment.models.user import User
from assessment.models.question import Question
from assessment.models.test import Test
from assessment.models.result import TestResult

__all__ = ["User", "Question", "Test", "TestResult"]
