# townhub/migrations/seed_jobs.py
"""Upsert the default town jobs by name.

Every job with a job challenge is included so the challenge can be unlocked.
"""
from townhub.migrations.runner import Migration, cli, run_migration
from townhub.models.job import Job

NAME = "seed_jobs"

DEFAULT_JOBS = [
    {
        "name": "Software Engineer",
        "description": (
            "Daily: check the Software Requests board and pick one task to work on. "
            "Weekly: deliver one working micro-app or feature and demo it to the class."
        ),
        "salary": 6000,
        "company_name": "Town Government / Tech Department",
        "location": "Development Lab",
        "requirements": "Problem solving, patience with testing, clear explanations",
    },
    {"name": "Architect", "description": "Design town buildings and plan land use",
     "salary": 7000, "company_name": "Town Planning Office", "location": "Town Hall"},
    {"name": "Civil Engineer", "description": "Plan roads, bridges and water supply",
     "salary": 7000, "company_name": "Public Works", "location": "Town Hall"},
    {"name": "Entrepreneur", "description": "Start and run a town business",
     "salary": 5000, "company_name": "Self-employed", "location": "Market Square"},
    {"name": "Event Planner", "description": "Organise class events and budgets",
     "salary": 4500, "company_name": "Town Events", "location": "Community Hall"},
    {"name": "HR Director", "description": "Manage hiring and staff wellbeing",
     "salary": 6500, "company_name": "Town Government", "location": "Town Hall"},
    {"name": "Marketing Manager", "description": "Promote town businesses and events",
     "salary": 5500, "company_name": "Town Media", "location": "Media Room"},
    {"name": "Nurse", "description": "Care for patients and track health records",
     "salary": 6000, "company_name": "Town Clinic", "location": "Clinic"},
    {"name": "Police Lieutenant", "description": "Lead patrols and keep order",
     "salary": 6000, "company_name": "Town Police", "location": "Police Station"},
    {"name": "Principal", "description": "Run the town school",
     "salary": 7500, "company_name": "Town School", "location": "School Office"},
    {"name": "Retail Manager", "description": "Manage stock, prices and sales",
     "salary": 5000, "company_name": "The Winkel", "location": "Shop"},
    {"name": "Teacher", "description": "Educate students", "salary": 5000,
     "company_name": "Town School", "location": "Classroom"},
]


def steps(m: Migration) -> None:
    m.create_table(Job.__table__)
    m.upsert(Job.__table__, "name", DEFAULT_JOBS)


def run(database_url=None) -> None:
    run_migration(NAME, steps, database_url)


def main(argv=None) -> None:
    cli(NAME, steps, __doc__, argv)


if __name__ == "__main__":
    main()
