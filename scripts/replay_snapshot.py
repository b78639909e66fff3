from __future__ import annotations

import argparse
import json
import random
from dataclasses import dataclass
from pathlib import Path
from urllib import request

RESPONDER_SEED = [
    ("Kimberely Keefe", 34.15684, -77.82525),
    ("Antonina Aguirre", 34.23519, -77.8718),
    ("Zachery Zerr", 34.11331, -77.81316),
    ("Marlyn Mitschke", 34.19219, -77.86253),
    ("Noe Nam", 34.25192, -77.83706),
    ("Theola Truax", 34.19492, -77.89356),
    ("Maribeth Mccord", 34.28068, -77.85109),
    ("Ellis Eckles", 34.27507, -77.86321),
    ("Major Mccowan", 34.1794, -77.87239),
    ("Ricarda Reina", 34.29284, -77.8365),
    ("Noah Nemitz", 34.26321, -77.85343),
    ("Rod Rezentes", 34.23318, -77.89284),
    ("Emory Earley", 34.23372, -77.82005),
    ("Hilario Harrel", 34.22722, -77.84538),
    ("Stephan Shilling", 34.16975, -77.82043),
    ("Ward Well", 34.13922, -77.82019),
]

DESTINATIONS = [
    {"name": "Wilmington Shelter", "lat": 34.1706, "lon": -77.949},
    {"name": "Port City Marina", "lat": 34.2406, "lon": -77.9532},
    {"name": "Wrightsville Beach Staging", "lat": 34.2085, "lon": -77.7964},
]


@dataclass
class ReplayContext:
    """Runtime options for snapshot replay."""

    api_base: str
    incidents: int
    responders: int
    seed: int


def post_json(url: str, payload: dict) -> dict:
    data = json.dumps(payload).encode("utf-8")
    req = request.Request(
        url=url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with request.urlopen(req, timeout=10) as resp:
        return json.loads(resp.read().decode("utf-8"))


def build_sample_snapshot(context: ReplayContext) -> dict:
    rng = random.Random(context.seed)
    responders = []
    for idx, (name, lat, lon) in enumerate(RESPONDER_SEED[: context.responders]):
        responders.append(
            {
                "id": f"R-{idx + 1}",
                "full_name": name,
                "boat_capacity": rng.randint(2, 12),
                "has_medical": rng.random() < 0.3,
                "lat": lat,
                "lon": lon,
                "phone_number": f"(910) 555-{1000 + idx:04d}",
                "is_person": rng.random() < 0.8,
            }
        )

    incidents = []
    priority_stats = {}
    for idx in range(context.incidents):
        incident_id = f"I-{idx + 1}"
        incidents.append(
            {
                "id": incident_id,
                "num_people": rng.randint(1, 8),
                "medical_needed": rng.random() < 0.25,
                "lat": round(rng.uniform(34.11, 34.30), 6),
                "lon": round(rng.uniform(-77.95, -77.80), 6),
                "reporter_id": f"reporter-{idx + 1}",
            }
        )
        priority_stats[incident_id] = {
            "priority": rng.randint(1, 15),
            "average_priority": 7.5,
            "incidents_waiting": context.incidents,
            "escalated": rng.random() < 0.1,
        }

    return {
        "incidents": incidents,
        "responders": responders,
        "destinations": DESTINATIONS,
        "priority_stats": priority_stats,
    }


def print_missions(result: dict) -> None:
    for mission in result["missions"]:
        if mission["status"] == "ASSIGNED":
            print(
                f"[MISSION] {mission['incident_id']} <- {mission['responder_id']} "
                f"score={mission['score']} distance={mission['distance_meters']}m "
                f"destination={mission['destination_name']}"
            )
        else:
            print(f"[MISSION] {mission['incident_id']} UNASSIGNED")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--snapshot",
        default="",
        help="Optional path to a JSON snapshot; a sample one is generated otherwise",
    )
    parser.add_argument("--api-base", default="http://127.0.0.1:8000")
    parser.add_argument("--incidents", type=int, default=10)
    parser.add_argument("--responders", type=int, default=len(RESPONDER_SEED))
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    context = ReplayContext(
        api_base=args.api_base,
        incidents=args.incidents,
        responders=args.responders,
        seed=args.seed,
    )

    if args.snapshot:
        snapshot_path = Path(args.snapshot)
        if not snapshot_path.exists():
            raise SystemExit(f"snapshot not found: {snapshot_path}")
        snapshot = json.loads(snapshot_path.read_text(encoding="utf-8"))
    else:
        snapshot = build_sample_snapshot(context)

    print(
        f"[INFO] incidents={len(snapshot['incidents'])}, "
        f"responders={len(snapshot['responders'])}"
    )
    result = post_json(f"{context.api_base}/v1/dispatch/cycles", snapshot)
    print_missions(result)

    summary = result["summary"]
    print(
        f"[DONE] cycle_id={result['cycle_id']} "
        f"assigned={summary['assigned']}/{summary['incidents_total']}"
    )
    print(
        "Check report: "
        f"{context.api_base}/v1/dispatch/cycles/{result['cycle_id']}/report"
    )


if __name__ == "__main__":
    main()
