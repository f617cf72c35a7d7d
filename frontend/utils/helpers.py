"""Helper functions for formatting learning plan data"""

import pandas as pd

RESOURCE_ICONS = {
    "video": "🎬",
    "document": "📄",
    "link": "🔗",
}


def resource_icon(resource_type):
    """Icon for a resource type; unknown types get the link icon"""
    return RESOURCE_ICONS.get((resource_type or "").lower(), RESOURCE_ICONS["link"])


def plans_to_dataframe(plans):
    """Convert learning plans to a DataFrame for reporting"""
    return pd.DataFrame([
        {
            "id": plan.id,
            "title": plan.title,
            "subject": plan.subject or "general",
            "completion_percentage": plan.completion_percentage,
            "completed_topics": sum(1 for t in plan.topics if t.completed),
            "total_topics": len(plan.topics),
            "followers": plan.followers,
        }
        for plan in plans
    ])
