"""
list_mix_challenges tool — browse the bundled mixing challenge catalog.

Pure computation over the YAML catalog shipped in core/mixing_eval/challenges/.
"""

from typing import Any

from core.mixing_eval import available_challenges, load_challenge
from tools.base import MusicalTool, ToolParameter, ToolResult


class ListMixChallenges(MusicalTool):
    """List challenge ids, titles, modules and target kinds."""

    @property
    def name(self) -> str:
        return "list_mix_challenges"

    @property
    def description(self) -> str:
        return (
            "List the bundled mixing challenges with their id, title, module, "
            "difficulty (1-3), target kind and track ids. Optionally filter by "
            "module code (e.g. 'F1', 'A4'). Use before evaluate_mix_challenge "
            "to find a challenge id or to show the learner what to practise next."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="module",
                type=str,
                description="Module code to filter by, e.g. 'F1'. Default: all modules.",
                required=False,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        module = kwargs.get("module")
        entries = []
        for challenge_id in available_challenges(module):
            challenge = load_challenge(challenge_id)
            entries.append(
                {
                    "id": challenge.id,
                    "title": challenge.title,
                    "module": challenge.module,
                    "difficulty": challenge.difficulty,
                    "target_kind": challenge.target.kind,
                    "tracks": [t.id for t in challenge.tracks],
                    "hints": list(challenge.hints),
                }
            )

        return ToolResult(
            success=True,
            data={"challenges": entries},
            metadata={"count": len(entries), "module": module},
        )
