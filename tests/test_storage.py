"""
Tests for the storage backends.

Every test in TestStorageContract runs against both MemStorage and
SqlStorage (SQLite) through the parametrized ``storage`` fixture.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from app.core.config import Settings
from app.core.errors import ConflictError
from app.core.storage import MemStorage, SqlStorage, get_storage_backend
from app.models.application import ApplicationStatus
from app.models.user import UserRole
from app.schemas.application import ApplicationCreate
from app.schemas.editor_profile import EditorProfileCreate
from app.schemas.job import JobCreate
from app.schemas.review import ReviewCreate
from app.schemas.user import UserCreate


def make_user(username="alice", email=None, role=UserRole.CREATOR):
    return UserCreate(
        username=username,
        email=email or f"{username}@example.com",
        password="hashed-secret",
        full_name=username.title(),
        role=role,
    )


def make_job(creator_id, **overrides):
    data = dict(
        title="Weekly Vlog Editor",
        description="Need an editor for my weekly vlogs with 48 hour turnaround.",
        job_type="Remote",
        employment_type="Ongoing",
        min_price=30,
        max_price=100,
        price_type="per video",
        skills=["Final Cut Pro", "Color Grading"],
        creator_id=creator_id,
    )
    data.update(overrides)
    return JobCreate(**data)


def make_profile(user_id):
    return EditorProfileCreate(
        user_id=user_id,
        title="Professional Video Editor",
        description="Experienced editor specializing in lifestyle content.",
        skills=["Premiere Pro"],
        hourly_rate=25,
        experience=5,
    )


class TestStorageContract:

    def test_ids_start_at_one_and_increase(self, storage):
        first = storage.create_user(make_user("alice"))
        second = storage.create_user(make_user("bob"))

        assert (first.id, second.id) == (1, 2)

    def test_created_records_read_back_unchanged(self, storage):
        """A fetched record is the insert data plus id (and createdAt)"""
        alice_data = make_user("alice")
        bob_data = make_user("bob", role=UserRole.EDITOR)
        alice = storage.create_user(alice_data)
        bob = storage.create_user(bob_data)
        job_data = make_job(alice.id)
        job = storage.create_job(job_data)
        profile_data = make_profile(bob.id)
        review_data = ReviewCreate(editor_id=bob.id, creator_id=alice.id, rating=5, comment="Great pacing")
        application_data = ApplicationCreate(
            job_id=job.id,
            editor_id=bob.id,
            cover_letter="I have edited vlogs for five years now.",
            price=80,
        )

        pairs = [
            (alice_data, alice, storage.get_user),
            (bob_data, bob, storage.get_user),
            (job_data, job, storage.get_job),
            (profile_data, storage.create_editor_profile(profile_data), storage.get_editor_profile),
            (review_data, storage.create_review(review_data), storage.get_review),
            (application_data, storage.create_application(application_data), storage.get_application),
        ]
        for data, created, get in pairs:
            fetched = get(created.id)
            assert fetched == created
            assert fetched.model_dump(exclude={"id", "created_at"}) == data.model_dump()

    def test_close_job_changes_only_is_active(self, storage):
        alice = storage.create_user(make_user("alice"))
        job = storage.create_job(make_job(alice.id))

        closed = storage.update_job(job.id, {"is_active": False})

        assert closed == job.model_copy(update={"is_active": False})

    def test_created_at_is_utc(self, storage):
        alice = storage.create_user(make_user("alice"))

        for record in (alice, storage.get_user(alice.id)):
            assert record.created_at.tzinfo is not None
            assert record.created_at.utcoffset() == timedelta(0)

    def test_missing_lookups_return_none(self, storage):
        assert storage.get_user(42) is None
        assert storage.get_user_by_username("nobody") is None
        assert storage.get_job(42) is None
        assert storage.get_editor_profile(42) is None
        assert storage.get_review(42) is None
        assert storage.get_application(42) is None
        assert storage.update_job(42, {"is_active": False}) is None

    def test_duplicate_username(self, storage):
        storage.create_user(make_user("alice"))

        with pytest.raises(ConflictError) as exc_info:
            storage.create_user(make_user("alice", email="other@example.com"))

        assert exc_info.value.message == "Username already exists"
        assert len(storage.get_users()) == 1

    def test_duplicate_email(self, storage):
        storage.create_user(make_user("alice"))

        with pytest.raises(ConflictError) as exc_info:
            storage.create_user(make_user("alicia", email="alice@example.com"))

        assert exc_info.value.message == "Email already registered"

    def test_update_user_email_collision(self, storage):
        storage.create_user(make_user("alice"))
        bob = storage.create_user(make_user("bob"))

        with pytest.raises(ConflictError):
            storage.update_user(bob.id, {"email": "alice@example.com"})

        assert storage.get_user(bob.id).email == "bob@example.com"

    def test_update_user_keeps_own_email(self, storage):
        alice = storage.create_user(make_user("alice"))

        updated = storage.update_user(alice.id, {"email": "alice@example.com", "full_name": "Alice A."})

        assert updated.full_name == "Alice A."

    def test_update_ignores_id(self, storage):
        alice = storage.create_user(make_user("alice"))
        job = storage.create_job(make_job(alice.id))

        updated = storage.update_job(job.id, {"id": 99, "title": "Renamed vlog job"})

        assert updated.id == job.id
        assert storage.get_job(99) is None

    def test_jobs_filter_and_order(self, storage):
        alice = storage.create_user(make_user("alice"))
        carol = storage.create_user(make_user("carol"))
        storage.create_job(make_job(alice.id))
        storage.create_job(make_job(carol.id, job_type="On-site"))
        storage.create_job(make_job(alice.id, is_active=False))

        assert [j.id for j in storage.get_jobs()] == [1, 2, 3]
        assert [j.id for j in storage.get_jobs({"creator_id": alice.id})] == [1, 3]
        assert [j.id for j in storage.get_jobs({"is_active": True})] == [1, 2]
        assert [j.id for j in storage.get_jobs({"job_type": "On-site"})] == [2]
        assert [j.id for j in storage.get_jobs_by_creator(carol.id)] == [2]

    def test_skills_keep_order(self, storage):
        alice = storage.create_user(make_user("alice"))
        skills = ["Vlog Editing", "After Effects", "Color Grading"]

        job = storage.create_job(make_job(alice.id, skills=skills))

        assert storage.get_job(job.id).skills == skills

    def test_one_profile_per_user(self, storage):
        bob = storage.create_user(make_user("bob", role=UserRole.EDITOR))
        storage.create_editor_profile(make_profile(bob.id))

        with pytest.raises(ConflictError) as exc_info:
            storage.create_editor_profile(make_profile(bob.id))

        assert exc_info.value.message == "User already has an editor profile"
        assert storage.get_editor_profile_by_user_id(bob.id).id == 1

    def test_reviews_by_editor_and_creator(self, storage):
        alice = storage.create_user(make_user("alice"))
        bob = storage.create_user(make_user("bob", role=UserRole.EDITOR))
        storage.create_review(ReviewCreate(editor_id=bob.id, creator_id=alice.id, rating=4))

        assert [r.rating for r in storage.get_reviews_by_editor(bob.id)] == [4]
        assert len(storage.get_reviews_by_creator(alice.id)) == 1
        assert storage.get_reviews_by_creator(bob.id) == []

    def test_application_defaults_to_pending(self, storage):
        alice = storage.create_user(make_user("alice"))
        bob = storage.create_user(make_user("bob", role=UserRole.EDITOR))
        job = storage.create_job(make_job(alice.id))

        application = storage.create_application(ApplicationCreate(
            job_id=job.id,
            editor_id=bob.id,
            cover_letter="I have edited vlogs for five years now.",
            price=80,
        ))
        updated = storage.update_application(application.id, {"status": ApplicationStatus.ACCEPTED})

        assert application.status == ApplicationStatus.PENDING
        assert updated.status == ApplicationStatus.ACCEPTED
        assert [a.id for a in storage.get_applications_by_job(job.id)] == [application.id]
        assert [a.id for a in storage.get_applications_by_editor(bob.id)] == [application.id]


class TestMemStorage:

    def test_returned_records_are_copies(self):
        storage = MemStorage()
        alice = storage.create_user(make_user("alice"))
        job = storage.create_job(make_job(alice.id))

        job.skills.append("Mutated")
        job.title = "Mutated"

        stored = storage.get_job(job.id)
        assert stored.title == "Weekly Vlog Editor"
        assert "Mutated" not in stored.skills

    def test_concurrent_registration_with_same_username(self):
        """Exactly one of many simultaneous registrations succeeds"""
        storage = MemStorage()

        def attempt(i):
            try:
                return storage.create_user(make_user("alice", email=f"alice{i}@example.com"))
            except ConflictError:
                return None

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(50)))

        assert len([r for r in results if r is not None]) == 1
        assert len(storage.get_users()) == 1

    def test_concurrent_ids_are_unique(self):
        storage = MemStorage()

        with ThreadPoolExecutor(max_workers=8) as pool:
            users = list(pool.map(lambda i: storage.create_user(make_user(f"user{i}")), range(40)))

        assert sorted(u.id for u in users) == list(range(1, 41))


class TestStorageFactory:

    def test_memory_backend(self):
        settings = Settings(_env_file=None, STORAGE_BACKEND="memory")

        assert isinstance(get_storage_backend(settings), MemStorage)

    def test_sql_backend(self):
        settings = Settings(_env_file=None, STORAGE_BACKEND="sql", SQLALCHEMY_DATABASE_URI="sqlite:///:memory:")

        assert isinstance(get_storage_backend(settings), SqlStorage)

    def test_unknown_backend(self):
        settings = Settings(_env_file=None, STORAGE_BACKEND="mongo")

        with pytest.raises(ValueError):
            get_storage_backend(settings)
