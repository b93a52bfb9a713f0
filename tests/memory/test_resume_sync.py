"""Tests for deriving facts from a parsed resume."""

from careermatch.memory import FactCategory, MemoryStore, extract_resume_facts, sync_resume_facts

PARSED_RESUME = {
    "personal_info": {"full_name": "Ana Smith", "location": "Auckland, NZ"},
    "skills": [{"name": f"skill{i}"} for i in range(12)],
    "work_experiences": [
        {"company": "OldCo", "position": "Intern", "is_current": False},
        {"company": "Acme", "position": "Backend Engineer", "is_current": True},
    ],
    "education": [
        {"institution": "University of Auckland", "major": "Computer Science"},
        {"institution": "High School", "major": "General"},
    ],
}


def test_extracts_one_fact_per_section():
    facts = extract_resume_facts("u1", PARSED_RESUME)

    assert [(f.category, f.content) for f in facts] == [
        (FactCategory.SKILL, "User has skills: " + ", ".join(f"skill{i}" for i in range(10))),
        (FactCategory.CAREER_GOAL, "User is currently working as Backend Engineer at Acme"),
        (FactCategory.OTHER, "User studied Computer Science at University of Auckland"),
        (FactCategory.PREFERENCE, "User is located in Auckland, NZ"),
    ]
    assert all(f.confidence == 0.9 for f in facts)
    assert all(f.source == "resume_upload" for f in facts)
    assert all(f.user_id == "u1" for f in facts)


def test_missing_sections_are_skipped():
    parsed = {
        "skills": [{"name": "Python"}, {"level": "expert"}],
        "work_experiences": [{"company": "OldCo", "position": "Intern", "is_current": False}],
        "education": [],
        "personal_info": {},
    }
    facts = extract_resume_facts("u1", parsed)
    assert [f.content for f in facts] == ["User has skills: Python"]


def test_empty_resume_yields_nothing():
    assert extract_resume_facts("u1", {}) == []


def test_sync_persists_facts(store: MemoryStore):
    saved = sync_resume_facts(store, "u1", PARSED_RESUME)

    assert len(saved) == 4
    assert all(f.id is not None for f in saved)
    assert store.get_facts("u1") == saved
    assert [f.content for f in store.get_facts("u1", FactCategory.PREFERENCE)] == [
        "User is located in Auckland, NZ"
    ]
