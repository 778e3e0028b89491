#!/usr/bin/env python3
"""Script to load a small demo topic/category with questions for development."""

import sys
from pathlib import Path

# Add parent directory to path to import quizbank modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from quizbank.core.logging import get_logger
from quizbank.core.security import hash_password
from quizbank.db.session import SessionLocal
from quizbank.models.content import Answer, Category, Question, QuestionCategory, Topic
from quizbank.models.user import User

logger = get_logger(__name__)

DEMO_QUESTIONS = [
    ("Capital of France", "Paris is the capital.", [("Paris", True), ("Lyon", False), ("Nice", False)]),
    ("2 + 2", "Basic arithmetic.", [("4", True), ("5", False), ("22", False)]),
    ("Prime numbers", "2 and 3 are prime, 4 is not.", [("2", True), ("3", True), ("4", False)]),
    ("Largest ocean", "The Pacific is the largest.", [("Pacific", True), ("Atlantic", False)]),
    ("Water formula", "Two hydrogen atoms, one oxygen.", [("H2O", True), ("CO2", False)]),
    ("Even numbers", "6 and 8 are even.", [("6", True), ("7", False), ("8", True)]),
]


def seed_demo_content(
    email: str = "demo@example.com",
    password: str = "demo",
    lang: str = "en",
) -> None:
    """Create a demo user, one topic and one category with questions."""
    db = SessionLocal()
    try:
        if db.scalars(select(User).where(User.email == email)).first() is not None:
            logger.warning(f"Demo user {email} already exists, skipping seed.")
            return

        user = User(email=email, password_hash=hash_password(password), username="demo")
        topic = Topic(name="General knowledge")
        category = Category(name="Warm-up")
        db.add_all([user, topic, category])
        db.flush()

        for name, explanation, options in DEMO_QUESTIONS:
            question = Question(topic_id=topic.id, name=name, lang=lang, explanation=explanation)
            question.answers = [Answer(value=value, is_correct=correct) for value, correct in options]
            db.add(question)
            db.flush()
            db.add(QuestionCategory(question_id=question.id, category_id=category.id))

        db.commit()
        logger.info(f"Seeded demo content: topic={topic.id} category={category.id}")
        print("\n✓ Demo content created!")
        print(f"  Email: {email}")
        print(f"  Password: {password}")
        print(f"  Topic ID: {topic.id}")
        print(f"  Category ID: {category.id}")
    except Exception as e:
        db.rollback()
        logger.error(f"Error seeding demo content: {e}", exc_info=True)
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_content()
