from typing import Iterable, Optional

class ProgressTracker:
    """
    Completion tracking for learning plan topics.
    A plan's completion percentage is always derived from its topics,
    never stored independently of them.
    """

    @staticmethod
    def calculate_completion_percentage(topics: Optional[Iterable]) -> float:
        """
        Percentage of completed topics.

        Args:
            topics: Topic models or schemas with a boolean `completed`

        Returns:
            0.0 for no topics, else 100 * completed / total
        """
        topics = list(topics or [])
        if not topics:
            return 0.0

        completed_count = sum(1 for topic in topics if topic.completed)
        return completed_count / len(topics) * 100

    @staticmethod
    def toggle(topic) -> bool:
        """Flip a topic's completed flag and return the new value"""
        topic.completed = not topic.completed
        return topic.completed

    @staticmethod
    def refresh_plan(plan) -> float:
        """Recompute and store the plan's completion percentage"""
        plan.completion_percentage = ProgressTracker.calculate_completion_percentage(plan.topics)
        return plan.completion_percentage
