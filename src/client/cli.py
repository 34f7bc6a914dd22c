"""
StoryWeaver CLI - terminal client for the StoryWeaver API.

Commands:
    storyweaver play                 Interactive co-authoring session
    storyweaver inspire --theme ...  One-shot inspiration kit, media saved to disk
"""

import argparse
import base64
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from dotenv import load_dotenv

from src.infra.logging_config import setup_logging
from .api_client import ClientRequestError, StoryWeaverClient
from .session import FOCI, GENRES, MEDIUMS, VIBES, StorySession

AUDIO_EXTENSIONS = {
    "audio/mpeg": "mp3",
    "audio/ogg": "opus",
    "audio/aac": "aac",
    "audio/flac": "flac",
    "audio/wav": "wav",
}

HELP_TEXT = """\
Commands:
  start                 begin a new story
  choose <n>            continue with choice number n
  continue              continue without picking a choice
  shift <genre>         genre-shift into <genre>
  genre <genre>         set the current genre
  intent <text>         set your creative intent
  audience <text>       set the audience profile
  inspire [theme]       generate an inspiration kit
  goal <text>           add a personal goal
  goals | log | beat    show goals / progress log / latest beat
  save <dir>            write the last kit's image and audio to <dir>
  clear                 reset the session
  help | quit"""


def print_beat(beat: Dict[str, Any], out: TextIO) -> None:
    print("\n" + "=" * 80, file=out)
    print(f"{beat['title']}  [{beat['genreContext']}]", file=out)
    print("=" * 80, file=out)
    print(beat["narrative"], file=out)
    print(f"\nTwist: {beat['twist']}", file=out)
    focus = beat["characterFocus"]
    print(f"Focus: {focus['name']} - wants {focus['motivation']}; conflict: {focus['conflict']}", file=out)
    print("\nChoices:", file=out)
    for index, choice in enumerate(beat["choices"], start=1):
        print(f"  {index}. {choice['label']} - {choice['description']}", file=out)
    feedback = beat["creativeFeedback"]
    print("\nFeedback:", file=out)
    for item in feedback["strengths"]:
        print(f"  + {item}", file=out)
    for item in feedback["opportunities"]:
        print(f"  ~ {item}", file=out)
    print(f"  Pacing: {feedback['pacingNote']}", file=out)
    print(f"  Dialogue: {feedback['dialogueNote']}", file=out)
    print(f"\nDaily challenge: {beat['suggestedDailyChallenge']}", file=out)
    print(f"Weekly challenge: {beat['suggestedWeeklyChallenge']}", file=out)


def print_inspiration(kit: Dict[str, Any], out: TextIO) -> None:
    print("\n--- Inspiration Kit ---", file=out)
    print(f"Spark: {kit['textSpark']}", file=out)
    print(f"Tags: {', '.join(kit['vibeTags'])}", file=out)
    print(f"Image prompt: {kit['imagePrompt']}", file=out)
    print(f"Audio prompt: {kit['audioPrompt']}", file=out)
    print(f"Image: {'included' if kit.get('imageBase64') else 'none'}", file=out)
    print(f"Audio: {kit['audioMimeType']}", file=out)


def save_media(kit: Dict[str, Any], directory: Path) -> Dict[str, Path]:
    """
    Decode the kit's base64 media into files.

    Returns:
        Mapping of "image"/"audio" to written paths (image omitted when
        the kit has none)
    """
    directory.mkdir(parents=True, exist_ok=True)
    written = {}
    if kit.get("imageBase64"):
        image_path = directory / "inspiration.png"
        image_path.write_bytes(base64.b64decode(kit["imageBase64"]))
        written["image"] = image_path
    extension = AUDIO_EXTENSIONS.get(kit["audioMimeType"], "bin")
    audio_path = directory / f"inspiration.{extension}"
    audio_path.write_bytes(base64.b64decode(kit["audioBase64"]))
    written["audio"] = audio_path
    return written


def _request_story(
    session: StorySession,
    client: StoryWeaverClient,
    mode: str,
    out: TextIO,
    choice: Optional[Dict[str, Any]] = None,
) -> None:
    beat = client.request_story(session.build_story_request(mode, choice))
    session.record_beat(beat, mode, choice)
    print_beat(beat, out)


def handle_command(session: StorySession, client: StoryWeaverClient, line: str, out: TextIO) -> bool:
    """
    Execute one interactive command.

    Returns:
        False when the session should end, True otherwise
    """
    command, _, argument = line.strip().partition(" ")
    command = command.lower()
    argument = argument.strip()

    try:
        if command in ("quit", "exit"):
            return False
        elif command == "start":
            _request_story(session, client, "start", out)
        elif command == "continue":
            _request_story(session, client, "continue", out)
        elif command == "choose":
            beat = session.latest_beat
            if beat is None:
                print("No story yet. Use 'start' first.", file=out)
            elif not argument.isdigit() or not 1 <= int(argument) <= len(beat["choices"]):
                print(f"Pick a choice between 1 and {len(beat['choices'])}.", file=out)
            else:
                _request_story(session, client, "continue", out, beat["choices"][int(argument) - 1])
        elif command == "shift":
            if not argument:
                print(f"Usage: shift <genre>  (e.g. {', '.join(GENRES[:3])})", file=out)
            else:
                session.target_genre = argument
                _request_story(session, client, "genre-shift", out)
                print(f"Genre is now {session.current_genre}.", file=out)
        elif command in ("genre", "intent", "audience"):
            if not argument:
                print(f"Usage: {command} <text>", file=out)
            elif command == "genre":
                session.current_genre = argument
            elif command == "intent":
                session.user_intent = argument
            else:
                session.audience_profile = argument
        elif command == "inspire":
            if argument:
                session.theme = argument
            kit = client.request_inspiration(session.build_inspiration_request())
            session.record_inspiration(kit)
            print_inspiration(kit, out)
        elif command == "goal":
            if not session.add_goal(argument):
                print("Goal is empty or already tracked.", file=out)
        elif command == "goals":
            for goal in session.goals or ["(no goals yet)"]:
                print(f"- {goal}", file=out)
        elif command == "log":
            for entry in session.progress_log or ["(nothing yet)"]:
                print(f"- {entry}", file=out)
        elif command == "beat":
            if session.latest_beat is None:
                print("No story yet.", file=out)
            else:
                print_beat(session.latest_beat, out)
        elif command == "save":
            if session.inspiration is None:
                print("No inspiration kit to save.", file=out)
            else:
                for kind, path in save_media(session.inspiration, Path(argument or ".")).items():
                    print(f"Saved {kind}: {path}", file=out)
        elif command == "clear":
            session.clear()
            print("Session cleared.", file=out)
        elif command in ("help", ""):
            print(HELP_TEXT, file=out)
        else:
            print(f"Unknown command: {line.strip()}. Type 'help'.", file=out)
    except ClientRequestError as e:
        print(f"Error: {e.message}", file=out)

    return True


def run_interactive(args) -> None:
    session = StorySession()
    if args.genre:
        session.current_genre = args.genre
    if args.intent:
        session.user_intent = args.intent

    print(f"StoryWeaver - {session.current_genre}. Type 'help' for commands.")
    with StoryWeaverClient(base_url=args.url) as client:
        while True:
            try:
                line = input("storyweaver> ")
            except EOFError:
                break
            if not handle_command(session, client, line, sys.stdout):
                break


def run_inspire(args) -> int:
    session = StorySession(theme=args.theme, vibe=args.vibe, medium=args.medium, focus=args.focus)
    with StoryWeaverClient(base_url=args.url) as client:
        try:
            kit = client.request_inspiration(session.build_inspiration_request())
        except ClientRequestError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

    if args.json:
        print(json.dumps({k: v for k, v in kit.items() if not k.endswith("Base64")}, ensure_ascii=False, indent=2))
    else:
        print_inspiration(kit, sys.stdout)
    for kind, path in save_media(kit, Path(args.output_dir)).items():
        print(f"Saved {kind}: {path}")
    return 0


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(description="StoryWeaver terminal client")
    parser.add_argument("--url", type=str, default=None, help="API base URL (default: $STORYWEAVER_URL or http://127.0.0.1:8000)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Client log level")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Interactive story session")
    play_parser.add_argument("--genre", type=str, default=None, help=f"Starting genre (default: {GENRES[0]})")
    play_parser.add_argument("--intent", type=str, default=None, help="Creative intent")

    inspire_parser = subparsers.add_parser("inspire", help="Generate one inspiration kit")
    inspire_parser.add_argument("--theme", type=str, required=True, help="Creative theme")
    inspire_parser.add_argument("--vibe", choices=VIBES, default=VIBES[0])
    inspire_parser.add_argument("--medium", choices=MEDIUMS, default=MEDIUMS[3])
    inspire_parser.add_argument("--focus", choices=FOCI, default=FOCI[2])
    inspire_parser.add_argument("--output-dir", type=str, default=".", help="Where to write image/audio files")
    inspire_parser.add_argument("--json", action="store_true", default=False, help="Print the kit as JSON (media omitted)")

    args = parser.parse_args()
    setup_logging(args.log_level, log_dir=None)

    if args.command == "play":
        run_interactive(args)
    elif args.command == "inspire":
        sys.exit(run_inspire(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
