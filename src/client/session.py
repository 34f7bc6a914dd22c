"""
In-memory story session.

Holds everything one user accumulates while co-authoring: beats, goals,
progress log and the last inspiration kit. Nothing is persisted; clear()
or process exit discards it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

GENRES = [
    "Speculative Fiction",
    "Sci-Fi Thriller",
    "Romantic Comedy",
    "Noir Mystery",
    "Urban Fantasy",
    "Historical Drama",
    "Mythic Adventure",
    "Psychological Horror",
    "Animated Family Saga",
]

VIBES = ["moody", "uplifting", "mysterious", "epic", "intimate"]
MEDIUMS = ["text", "image", "audio", "mixed"]
FOCI = ["character", "world", "scene", "mood"]

DEFAULT_USER_INTENT = "Craft a character-driven pilot that balances wonder with emotional stakes."
DEFAULT_AUDIENCE_PROFILE = "Ideal for streaming audiences who crave grounded sci-fi with inclusive leads."
DEFAULT_THEME = "Neon-lit metropolis in monsoon season"


@dataclass
class StorySession:
    """
    Session state for one co-authoring session.

    Beats and inspiration kits are kept as the JSON dicts returned by the
    server, so they can be sent back verbatim as previousBeats.
    """
    user_intent: str = DEFAULT_USER_INTENT
    audience_profile: str = DEFAULT_AUDIENCE_PROFILE
    current_genre: str = GENRES[0]
    target_genre: str = GENRES[3]
    theme: str = DEFAULT_THEME
    vibe: str = VIBES[0]
    medium: str = MEDIUMS[3]
    focus: str = FOCI[2]
    beats: List[Dict[str, Any]] = field(default_factory=list)
    goals: List[str] = field(default_factory=list)
    progress_log: List[str] = field(default_factory=list)
    inspiration: Optional[Dict[str, Any]] = None

    @property
    def latest_beat(self) -> Optional[Dict[str, Any]]:
        return self.beats[-1] if self.beats else None

    def build_story_request(self, mode: str, choice: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Build the POST /story body.

        targetGenre is only sent for genre-shift; choiceId only when a
        choice was taken.
        """
        body: Dict[str, Any] = {
            "mode": mode,
            "currentGenre": self.current_genre,
            "userIntent": self.user_intent,
            "previousBeats": list(self.beats),
            "audienceProfile": self.audience_profile,
        }
        if mode == "genre-shift":
            body["targetGenre"] = self.target_genre
        if choice is not None:
            body["choiceId"] = choice["id"]
        return body

    def build_inspiration_request(self) -> Dict[str, str]:
        return {
            "theme": self.theme,
            "vibe": self.vibe,
            "medium": self.medium,
            "focus": self.focus,
        }

    def record_beat(
        self,
        beat: Dict[str, Any],
        mode: str,
        choice: Optional[Dict[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Append a beat, merge its micro-goals and log the step."""
        self.beats.append(beat)

        for goal in beat.get("microGoals", []):
            self._merge_goal(goal)

        timestamp = (now or datetime.now()).strftime("%H:%M:%S")
        self.progress_log.append(f"{beat.get('title', 'Untitled beat')} ({timestamp})")
        if choice is not None:
            self.progress_log.append(f"Chose: {choice['label']}")

        if mode == "genre-shift":
            self.current_genre = self.target_genre

    def record_inspiration(self, kit: Dict[str, Any]) -> None:
        self.inspiration = kit
        self.progress_log.append(f"Generated inspiration for {self.theme}")

    def add_goal(self, text: str) -> bool:
        """Add a user goal. Returns False for blank or duplicate goals."""
        return self._merge_goal(text)

    def _merge_goal(self, text: str) -> bool:
        goal = text.strip()
        if not goal or goal in self.goals:
            return False
        self.goals.append(goal)
        return True

    def clear(self) -> None:
        """Reset story progress; form fields (genre, intent, theme) are kept."""
        self.beats = []
        self.goals = []
        self.progress_log = []
        self.inspiration = None

    def audio_data_uri(self) -> Optional[str]:
        """data: URI for the last kit's audio, or None."""
        if not self.inspiration or not self.inspiration.get("audioBase64"):
            return None
        return f"data:{self.inspiration['audioMimeType']};base64,{self.inspiration['audioBase64']}"
