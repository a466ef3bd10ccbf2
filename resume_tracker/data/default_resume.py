"""Starter resume used when the owner has nothing to duplicate yet."""

DEFAULT_RESUME = {
    "name": "Alex Morgan",
    "title": "Alex Morgan",
    "initials": "AM",
    "location": "Portland, OR",
    "locationLink": "https://www.google.com/maps/place/Portland,+OR",
    "about": "Backend engineer who likes boring infrastructure and fast feedback loops.",
    "summary": (
        "Software engineer with eight years of experience building web services, "
        "data pipelines and internal tooling. Comfortable owning a feature from "
        "schema design to production monitoring."
    ),
    "avatarUrl": "",
    "personalWebsiteUrl": "https://example.com",
    "contact": {
        "email": "alex.morgan@example.com",
        "tel": "+1 555 010 2030",
        "social": [
            {"name": "GitHub", "url": "https://github.com/example"},
            {"name": "LinkedIn", "url": "https://www.linkedin.com/in/example"},
        ],
    },
    "education": [
        {
            "school": "Oregon State University",
            "degree": "B.S. Computer Science",
            "start": "2010",
            "end": "2014",
        },
    ],
    "work": [
        {
            "company": "Riverbend Analytics",
            "link": "https://riverbend.example.com",
            "title": "Senior Software Engineer",
            "start": "2019",
            "end": None,
            "description": "Lead engineer on the ingestion platform.",
            "badges": ["Python", "PostgreSQL", "AWS"],
            "tasks": [
                "Moved nightly batch imports to an event-driven pipeline.",
                "Cut p95 API latency by a third through query tuning.",
            ],
        },
        {
            "company": "Cedar Labs",
            "link": "https://cedar.example.com",
            "title": "Software Engineer",
            "start": "2014",
            "end": "2019",
            "description": "Full-stack work on a B2B scheduling product.",
            "badges": ["Django", "JavaScript"],
            "tasks": ["Built the public REST API and its client SDK."],
        },
    ],
    "skills": ["Python", "Django", "SQL", "Docker", "Terraform"],
    "projects": [
        {
            "title": "pgsnap",
            "description": "Command-line tool for point-in-time Postgres snapshots.",
            "techStack": ["Python", "PostgreSQL"],
            "link": {"label": "github.com/example/pgsnap", "href": "https://github.com/example/pgsnap"},
        },
    ],
}
