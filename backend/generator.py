import logging
import random
from datetime import datetime
from typing import Callable, List, Optional, Tuple
from sqlalchemy.orm import Session
from backend.config import settings
from backend.crud.learning_plan import create_learning_plan
from backend.models import LearningPlan, Topic, Resource, User
from backend.schemas import LearningPlanGenerationRequest

logger = logging.getLogger(__name__)

# Label used when a request leaves subject or difficulty blank
DEFAULT_LABEL = "general"

TITLE_PREFIXES = {
    "beginner": "Introduction to ",
    "intermediate": "Mastering ",
    "advanced": "Advanced ",
}
DEFAULT_TITLE_PREFIX = "Complete Guide to "

TOPIC_COUNTS = {
    "beginner": 5,
    "intermediate": 7,
    "advanced": 9,
}
DEFAULT_TOPIC_COUNT = 6

MATHS_TOPICS = [
    "Introduction to Algebra", "Linear Equations", "Quadratic Equations",
    "Geometry Basics", "Trigonometry", "Calculus Fundamentals",
    "Statistics and Probability", "Number Theory", "Matrices"
]

ENGLISH_TOPICS = [
    "Grammar Essentials", "Essay Writing", "Critical Reading",
    "Literature Analysis", "Creative Writing", "Research Paper Writing",
    "Public Speaking", "Vocabulary Building", "Rhetoric and Persuasion"
]

SCIENCE_TOPICS = [
    "Scientific Method", "Physics Fundamentals", "Chemistry Basics",
    "Biology Essentials", "Earth Science", "Astronomy",
    "Environmental Science", "Genetics", "Energy and Matter"
]

# (title, url, type)
MATHS_RESOURCES = [
    ("Khan Academy Math", "https://www.khanacademy.org/math", "video"),
    ("MIT OpenCourseWare", "https://ocw.mit.edu/courses/mathematics/", "video"),
    ("Brilliant - Mathematics", "https://brilliant.org/math/", "link"),
]

ENGLISH_RESOURCES = [
    ("Purdue Online Writing Lab", "https://owl.purdue.edu/", "document"),
    ("Grammarly Blog", "https://www.grammarly.com/blog/", "link"),
    ("TED Talks for English Learners", "https://www.ted.com/", "video"),
]

SCIENCE_RESOURCES = [
    ("National Geographic", "https://www.nationalgeographic.com/science/", "link"),
    ("NASA Science", "https://science.nasa.gov/", "link"),
    ("SciShow YouTube Channel", "https://www.youtube.com/user/scishow", "video"),
]

TOPIC_POOLS = {
    "maths": MATHS_TOPICS,
    "english": ENGLISH_TOPICS,
    "science": SCIENCE_TOPICS,
}

RESOURCE_POOLS = {
    "maths": MATHS_RESOURCES,
    "english": ENGLISH_RESOURCES,
    "science": SCIENCE_RESOURCES,
}


def get_generator(seed: Optional[int] = None) -> "PlanGenerator":
    """Factory returning a generator seeded from the argument or config"""
    if seed is None:
        seed = settings.generator_seed
    return PlanGenerator(rng=random.Random(seed))


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def generate_title(subject: Optional[str], difficulty: Optional[str]) -> str:
    """Difficulty prefix followed by the capitalized subject"""
    prefix = TITLE_PREFIXES.get(_normalize(difficulty), DEFAULT_TITLE_PREFIX)
    display_subject = (subject or "").strip() or DEFAULT_LABEL
    return prefix + display_subject.capitalize()


def generate_description(subject: Optional[str], difficulty: Optional[str]) -> str:
    level = _normalize(difficulty) or DEFAULT_LABEL
    topic = _normalize(subject) or DEFAULT_LABEL
    return (
        f"A {level} level learning plan designed to help you master {topic} "
        f"concepts through structured topics and curated resources."
    )


def resolve_topic_pool(subject: Optional[str]) -> List[str]:
    """Topic pool for a subject; unknown subjects mix the first 3 of each pool"""
    pool = TOPIC_POOLS.get(_normalize(subject))
    if pool is not None:
        return list(pool)
    return MATHS_TOPICS[:3] + ENGLISH_TOPICS[:3] + SCIENCE_TOPICS[:3]


def resolve_resource_pool(subject: Optional[str]) -> List[Tuple[str, str, str]]:
    """Resource pool for a subject; unknown subjects get all maths plus one english and one science"""
    pool = RESOURCE_POOLS.get(_normalize(subject))
    if pool is not None:
        return list(pool)
    return MATHS_RESOURCES + ENGLISH_RESOURCES[:1] + SCIENCE_RESOURCES[:1]


def topic_count_for(difficulty: Optional[str]) -> int:
    return TOPIC_COUNTS.get(_normalize(difficulty), DEFAULT_TOPIC_COUNT)


class PlanGenerator:
    """
    Builds learning plans from canned topic and resource tables.

    Topic selection is random (shuffle, then take a prefix), so the random
    source is injected; pass a seeded random.Random for reproducible plans.
    """

    def __init__(self, rng: Optional[random.Random] = None, clock: Optional[Callable[[], datetime]] = None):
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else datetime.utcnow

    def select_topics(self, subject: Optional[str], difficulty: Optional[str]) -> List[str]:
        """
        Sample topic titles without replacement.

        Returns:
            topic_count_for(difficulty) distinct titles from the subject's
            pool, or the whole pool (shuffled) when it is smaller
        """
        pool = resolve_topic_pool(subject)
        count = min(topic_count_for(difficulty), len(pool))

        shuffled = list(pool)
        self.rng.shuffle(shuffled)
        return shuffled[:count]

    def generate_learning_plan(
        self,
        db: Session,
        request: LearningPlanGenerationRequest,
        user: User
    ) -> LearningPlan:
        """
        Generate and persist a learning plan for `user`.

        The plan is flushed first so topics and resources can reference
        its id. Plan and children are committed together; on any failure
        the whole unit is rolled back.

        Args:
            db: Database session
            request: Subject, difficulty and optional overrides
            user: Owner of the new plan

        Returns:
            The persisted plan with topics and resources loaded
        """
        subject = (request.subject or "").strip()
        difficulty = (request.difficulty or "").strip()

        if request.description:
            description = request.description
        else:
            description = generate_description(subject, difficulty)

        plan = LearningPlan(
            title=generate_title(subject, difficulty),
            description=description,
            subject=subject or DEFAULT_LABEL,
            estimated_days=request.estimated_days or settings.default_estimated_days,
            created_at=self.clock(),
            completion_percentage=0.0
        )
        try:
            saved_plan = create_learning_plan(db, plan, user, commit=False)

            topics = [
                Topic(learning_plan_id=saved_plan.id, title=title, completed=False, position=i)
                for i, title in enumerate(self.select_topics(subject, difficulty))
            ]
            resources = [
                Resource(learning_plan_id=saved_plan.id, title=title, url=url, type=resource_type, position=i)
                for i, (title, url, resource_type) in enumerate(resolve_resource_pool(subject))
            ]
            db.add_all(topics + resources)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Generating a %s plan failed, rolled back", subject or DEFAULT_LABEL)
            raise
        db.refresh(saved_plan)

        logger.info(
            "Generated plan %s '%s' with %d topics and %d resources",
            saved_plan.id, saved_plan.title, len(topics), len(resources)
        )
        return saved_plan
