"""Seed script: creates a demo user with a filled-in master resume and a tailored variant.

Usage:
    python scripts/seed.py              # uses http://localhost:8000
    python scripts/seed.py http://host  # custom base URL
"""

import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

USER = {"username": "alice", "password": "password123"}

CONTACT_INFO = {
    "full_name": "Alice Smith",
    "location": "Portland, OR",
    "email": "alice@example.com",
    "github": "alice-smith",
}

EDUCATIONS = [
    {
        "school": "Portland State University",
        "location": "Portland, OR",
        "start_date": "2012-09-01",
        "end_date": "2016-06-15",
        "degree": "BSc Computer Science",
        "gpa": "3.7",
    },
]

EXPERIENCES = [
    {
        "experience": {
            "title": "Backend Engineer",
            "organization": "Acme Corp",
            "location": "Remote",
            "start_date": "2019-03-01",
        },
        "bullets": [
            "Designed the billing service handling 2M invoices a month",
            "Cut p99 API latency by 40% by reworking query plans",
        ],
    },
    {
        "experience": {
            "title": "Software Engineer",
            "organization": "Initech",
            "location": "Portland, OR",
            "start_date": "2016-07-01",
            "end_date": "2019-02-28",
        },
        "bullets": ["Maintained the internal reporting pipeline"],
    },
]

SKILLS = ["Python", "PostgreSQL", "FastAPI"]


def register(client: httpx.Client) -> None:
    resp = client.post(f"{BASE_URL}/api/auth/register", json=USER)
    if resp.status_code == 201:
        print(f"  Registered {USER['username']}")
    elif resp.status_code == 409:
        print(f"  {USER['username']} already exists, skipping")
    else:
        resp.raise_for_status()


def login(client: httpx.Client) -> dict:
    resp = client.post(f"{BASE_URL}/api/auth/login", json=USER)
    resp.raise_for_status()
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def post(client: httpx.Client, headers: dict, path: str, body: dict | None = None) -> dict:
    resp = client.post(f"{BASE_URL}/api{path}", json=body, headers=headers)
    resp.raise_for_status()
    return resp.json()


def main() -> None:
    print(f"Seeding against {BASE_URL}\n")

    with httpx.Client(timeout=10) as client:
        print("User:")
        register(client)
        headers = login(client)

        resp = client.put(f"{BASE_URL}/api/contact-info", json=CONTACT_INFO, headers=headers)
        resp.raise_for_status()

        documents = client.get(f"{BASE_URL}/api/documents/", headers=headers).json()
        master_id = next(d["id"] for d in documents if d["is_master"])

        # 1. Fill the master resume
        print("\nMaster resume:")
        sections = client.get(f"{BASE_URL}/api/sections").json()
        for section in sections:
            post(client, headers, f"/documents/{master_id}/sections/{section['id']}")
        print(f"  Added {len(sections)} sections")

        for education in EDUCATIONS:
            post(client, headers, f"/documents/{master_id}/educations", education)
            print(f"  Added education at {education['school']}")

        experience_ids = []
        first_bullet = None
        for entry in EXPERIENCES:
            created = post(
                client, headers, f"/documents/{master_id}/experiences", entry["experience"]
            )
            experience_id = created["experience"]["id"]
            experience_ids.append(experience_id)
            for content in entry["bullets"]:
                snippet = post(
                    client,
                    headers,
                    f"/documents/{master_id}/experiences/{experience_id}/text-snippets",
                    {"type": "bullet", "content": content},
                )["text_snippet"]
                first_bullet = first_bullet or snippet
            print(f"  Added experience '{entry['experience']['title']}'")

        for name in SKILLS:
            post(client, headers, f"/documents/{master_id}/skills", {"name": name})
        print(f"  Added {len(SKILLS)} skills")

        # 2. Tailored variant reusing master content
        print("\nVariant:")
        variant = post(client, headers, "/documents/", {"name": "Backend roles"})
        post(client, headers, f"/documents/{variant['id']}/experiences/{experience_ids[0]}")
        post(
            client,
            headers,
            f"/documents/{variant['id']}/experiences/{experience_ids[0]}"
            f"/text-snippets/{first_bullet['id']}",
            {"version": first_bullet["version"]},
        )
        print(f"  Created '{variant['name']}' ({variant['id']})")

    print("\nDone!")


if __name__ == "__main__":
    main()
