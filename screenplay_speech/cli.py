"""screenplay-speech CLI entry point."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="screenplay-speech",
        description="Screenplay Speech: screenplay elements to speakable items",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log per-element progress",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    validate_parser = sub.add_parser(
        "validate-elements", help="Validate an ElementDocument JSON file",
    )
    validate_parser.add_argument(
        "--elements", required=True, metavar="elements.json",
        help="Path to an ElementDocument JSON file",
    )
    generate_parser = sub.add_parser(
        "generate",
        help="Run a checkpointed generation job into an item store",
    )
    generate_parser.add_argument(
        "--elements", required=True, metavar="elements.json",
        help="Path to an ElementDocument JSON file",
    )
    generate_parser.add_argument(
        "--store", required=True, metavar="DIR",
        help="Item store root directory",
    )
    generate_parser.add_argument(
        "--config", metavar="config.json",
        help="JobConfig JSON file (defaults come from SCREENPLAY_SPEECH_* variables)",
    )
    generate_parser.add_argument("--rule-version", metavar="VERSION")
    generate_parser.add_argument("--checkpoint-interval", type=int, metavar="N")
    generate_parser.add_argument(
        "--aliases", metavar="aliases.json",
        help="JSON object mapping raw character cues to canonical names",
    )
    export_parser = sub.add_parser(
        "export-items",
        help="Write a stored document's items as canonical SpeakableItems JSON",
    )
    export_parser.add_argument("--store", required=True, metavar="DIR")
    export_parser.add_argument("--document-id", required=True)
    export_parser.add_argument(
        "--output", required=True, metavar="items.json",
        help="Destination path for the SpeakableItems JSON",
    )
    args = parser.parse_args()
    _configure_logging(args.verbose)

    if args.command == "validate-elements":
        from screenplay_speech.validator import validate_element_document_file
        try:
            errors = validate_element_document_file(Path(args.elements))
        except ValueError as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        if errors:
            print("ERROR: invalid ElementDocument")
            for err in errors:
                print(f"  - {err}")
            sys.exit(1)
        print("OK: ElementDocument is valid")
        sys.exit(0)
    elif args.command == "generate":
        import jsonschema
        from pydantic import ValidationError
        try:
            ok = generate(
                Path(args.elements),
                Path(args.store),
                config_path=Path(args.config) if args.config else None,
                rule_version=args.rule_version,
                checkpoint_interval=args.checkpoint_interval,
                aliases_path=Path(args.aliases) if args.aliases else None,
            )
        except jsonschema.ValidationError as exc:
            print(f"ERROR: invalid ElementDocument: {exc.message}")
            sys.exit(1)
        except (ValidationError, ValueError, OSError) as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        sys.exit(0 if ok else 1)
    elif args.command == "export-items":
        try:
            export_items(Path(args.store), args.document_id, Path(args.output))
        except ValueError as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        print(f"OK: items written to {args.output}")
        sys.exit(0)
    else:
        parser.print_help()
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _build_config(config_path, rule_version, checkpoint_interval, aliases_path):
    from screenplay_speech.config import JobConfig, load_job_config

    base = load_job_config(config_path) if config_path is not None else JobConfig.from_env()
    data = base.model_dump()
    if rule_version is not None:
        data["rule_version"] = rule_version
    if checkpoint_interval is not None:
        data["checkpoint_interval"] = checkpoint_interval
    if aliases_path is not None:
        data["aliases"] = json.loads(aliases_path.read_text(encoding="utf-8"))
    return JobConfig.model_validate(data)


def generate(
    elements_path: Path,
    store_dir: Path,
    *,
    config_path: Path | None = None,
    rule_version: str | None = None,
    checkpoint_interval: int | None = None,
    aliases_path: Path | None = None,
) -> bool:
    """Validate an element document, run a GenerationJob into a
    FileItemRepository under *store_dir*, and report the outcome.

    Returns True iff the job completed.

    Raises ``jsonschema.ValidationError`` if the document does not conform to
    ``contracts/ElementDocument.v1.json``; the job is never started then.
    """
    from item_store.file_store import FileItemRepository
    from screenplay_speech.contract_validate import validate_element_document
    from screenplay_speech.schemas.elements_v1 import load_element_document
    from screenplay_speech.tasks.job import GenerationJob
    from screenplay_speech.tasks.state import JobState

    raw_data = json.loads(elements_path.read_text(encoding="utf-8"))
    validate_element_document(raw_data)
    document = load_element_document(raw_data)
    config = _build_config(config_path, rule_version, checkpoint_interval, aliases_path)

    job = GenerationJob(
        document.elements,
        FileItemRepository(store_dir),
        document.document_id,
        config,
    )
    snapshot = job.run()
    if snapshot.state == JobState.completed:
        print(f"OK: {snapshot.message}")
        return True
    print(f"ERROR: job {snapshot.state.value}: {snapshot.message}")
    return False


def export_items(store_dir: Path, document_id: str, output_path: Path) -> None:
    """Replay a document's checkpoints and write canonical SpeakableItems JSON.

    The export is validated against ``contracts/SpeakableItems.v1.json``
    before it is written.
    """
    from item_store.file_store import FileItemRepository
    from screenplay_speech.contract_validate import validate_items_document
    from screenplay_speech.schemas.items_v1 import dump_items, items_document

    items = FileItemRepository(store_dir).load_document_items(document_id)
    validate_items_document(items_document(document_id, items))
    output_path.write_text(dump_items(document_id, items), encoding="utf-8")
