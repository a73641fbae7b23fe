"""
Change log example for objdiff.

This example demonstrates:
- Narrowing stored records into diffable snapshots
- Skipping updates that change nothing
- Storing the change list next to an update
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from objdiff import DiffRenderer, diff_object, to_diffable


@dataclass
class Team:
    name: str
    short_name: str
    status: str = "Active"
    tags: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)


def update_team(team: Team, fields: Dict[str, Any], change_logs: List[Dict[str, Any]]) -> Team:
    """Apply an update and record what changed."""
    before = to_diffable(team)
    after = {**before, **to_diffable(fields)}

    changes = diff_object(before, after)
    if not changes:
        print("No changes, update skipped")
        return team

    change_logs.append({
        "event": "Update",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "changes": changes.to_list(),
    })
    print(DiffRenderer(color=False).render_terminal(changes))
    return Team(**after)


def main():
    change_logs: List[Dict[str, Any]] = []

    team = Team(name="Mountain Rescue", short_name="MR", tags=["alpine"])

    team = update_team(team, {"name": "Mountain Rescue North"}, change_logs)
    team = update_team(team, {"name": "Mountain Rescue North"}, change_logs)
    team = update_team(
        team,
        {"tags": ["alpine", "swiftwater"], "properties": {"callsign": "MRN1"}},
        change_logs,
    )

    print(json.dumps(change_logs, indent=2))


if __name__ == "__main__":
    main()
