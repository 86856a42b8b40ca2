"""
Demo data for local development.

Seeds one creator, one editor, two jobs and the editor's profile. Both demo
accounts use the password "password123".
"""

import logging

from app.core.security import get_password_hash
from app.core.storage import StorageBackend
from app.models.user import UserRole
from app.schemas.editor_profile import EditorProfileCreate
from app.schemas.job import JobCreate
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


def seed_demo_data(storage: StorageBackend) -> None:
    """Insert the demo records unless the demo creator already exists."""
    if storage.get_user_by_username("johndoe"):
        logger.info("Demo data already present, skipping seed")
        return

    password = get_password_hash(DEMO_PASSWORD)

    creator = storage.create_user(UserCreate(
        username="johndoe",
        email="john@example.com",
        password=password,
        full_name="John Doe",
        role=UserRole.CREATOR,
    ))
    editor = storage.create_user(UserCreate(
        username="janedoe",
        email="jane@example.com",
        password=password,
        full_name="Jane Doe",
        role=UserRole.EDITOR,
    ))

    storage.create_job(JobCreate(
        title="Gaming Video Editor Needed",
        description="Looking for a skilled editor for my Minecraft YouTube channel. Need someone who can create "
                    "engaging edits, add effects, and has experience with gaming content.",
        creator_id=creator.id,
        job_type="Remote",
        employment_type="Per Project",
        min_price=50,
        max_price=200,
        price_type="per video",
        skills=["Premiere Pro", "After Effects", "Gaming", "YouTube"],
    ))
    storage.create_job(JobCreate(
        title="Weekly Vlog Editor",
        description="Need an editor for my weekly vlogs. Should be able to turn around edits within 48 hours and "
                    "have a good sense of pacing and storytelling.",
        creator_id=creator.id,
        job_type="Remote",
        employment_type="Ongoing",
        min_price=30,
        max_price=100,
        price_type="per video",
        skills=["Final Cut Pro", "Color Grading", "Vlog Editing"],
    ))

    storage.create_editor_profile(EditorProfileCreate(
        user_id=editor.id,
        title="Professional Video Editor",
        description="Experienced editor specializing in gaming and lifestyle content. 5+ years of experience "
                    "working with YouTubers.",
        skills=["Premiere Pro", "After Effects", "DaVinci Resolve", "Motion Graphics"],
        hourly_rate=25,
        experience=5,
        portfolio_url="https://portfolio.example.com",
    ))

    logger.info("Seeded demo data: 2 users, 2 jobs, 1 editor profile")
