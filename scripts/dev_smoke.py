"""
Dev smoke script:
- Calls the Flask app using test_client (no external server needed)
- GET /api/health and POST /api/generate-ideas
- Writes responses to dev_health.json and dev_generate.json (in repo root)
Note: /api/generate-ideas performs a REAL model call using your .env GEMINI_API_KEY / OPENAI_API_KEY.
"""

from __future__ import annotations

import sys
from pathlib import Path

from ideagraph.app import create_app
from ideagraph.config import get_config


def main() -> int:
    topic = " ".join(sys.argv[1:]) or "Instagram reel ideas for a neighborhood bakery"
    app = create_app(get_config())

    root = Path(".")
    health_path = root / "dev_health.json"
    generate_path = root / "dev_generate.json"

    with app.test_client() as c:
        h = c.get("/api/health")
        health_path.write_text(h.get_data(as_text=True), encoding="utf-8")

        g = c.post("/api/generate-ideas", json={"topic": topic})
        generate_path.write_text(g.get_data(as_text=True), encoding="utf-8")

        print(f"Health status: {h.status_code} -> {health_path}")
        print(f"Generate status: {g.status_code} -> {generate_path}")
        if g.status_code == 201:
            graph = g.get_json()["graph"]
            scripted = sum(1 for n in graph["nodes"] if n.get("script"))
            print(f"Ideas: {len(graph['nodes'])}, edges: {len(graph['edges'])}, scripts: {scripted}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
