"""
mediajob CLI - thin presentation driver for the media-job pipeline.

Picks a source, runs the requested operations in order
(info -> frame -> transcode) and streams the activity log.

Exit Codes:
- 0: Final status is not FAILED
- 1: The pipeline ended FAILED
- 2: Invalid arguments
"""

import argparse
import sys
from typing import List, Optional

from mediajob.core.config.settings import settings
from mediajob.core.database.connection import init_db
from mediajob.core.jobs.domain.models import JobSnapshot
from mediajob.core.jobs.service.controller import JobController
from mediajob.core.jobs.types import JobStatus
from mediajob.core.logging.log_config import setup_logging
from mediajob.features.source_selection.data.selectors import PromptSourceSelector, StaticSourceSelector
from mediajob.features.storage.data.permission_gate import build_permission_gate
from mediajob.features.storage.service.api import MediaLibraryPersister


class LogPrinter:
    """Prints log entries that appeared since the previous snapshot."""

    def __init__(self, stream=sys.stdout):
        self.stream = stream
        self._printed = 0

    def __call__(self, snapshot: JobSnapshot) -> None:
        for entry in snapshot.log[self._printed:]:
            print(f"# {entry.message}", file=self.stream)
        self._printed = len(snapshot.log)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediajob",
        description="Inspect, grab a frame from and transcode a video.",
    )
    parser.add_argument("source", nargs="?",
                        help="Path or URI of the video (prompted for when omitted)")
    parser.add_argument("--info", action="store_true",
                        help="Log the media properties")
    parser.add_argument("--frame", type=int, metavar="N", nargs="?",
                        const=settings.DEFAULT_FRAME_INDEX,
                        help=f"Extract frame N (default {settings.DEFAULT_FRAME_INDEX})")
    parser.add_argument("--transcode", type=int, metavar="HEIGHT", nargs="?",
                        const=settings.DEFAULT_TARGET_HEIGHT,
                        help=f"Transcode to HEIGHT pixels (default {settings.DEFAULT_TARGET_HEIGHT})")
    parser.add_argument("--save", choices=["granted", "denied", "prompt"],
                        default=settings.LIBRARY_PERMISSION,
                        help="Media library write permission")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.frame is not None and args.frame < 0:
        parser.error("--frame must be a non-negative integer")
    if args.transcode is not None and args.transcode <= 0:
        parser.error("--transcode must be a positive integer")

    setup_logging("DEBUG" if args.verbose else None)
    settings.ensure_dirs()
    init_db()

    controller = JobController(
        persister=MediaLibraryPersister(gate=build_permission_gate(args.save))
    )
    printer = LogPrinter()
    printer(controller.snapshot())
    controller.add_listener(printer)

    selector = StaticSourceSelector(args.source) if args.source else PromptSourceSelector()
    controller.pick_source(selector)

    steps = []
    if args.info:
        steps.append(controller.request_probe)
    if args.frame is not None:
        steps.append(lambda: controller.request_extract_frame(args.frame))
    if args.transcode is not None:
        steps.append(lambda: controller.request_transcode(args.transcode))

    for step in steps:
        if controller.snapshot().status == JobStatus.FAILED:
            break
        step()

    final = controller.snapshot()
    if final.thumbnail_path:
        print(f"Thumbnail: {final.thumbnail_path}")
    if final.output_path:
        print(f"Saved: {final.output_path}")

    return 1 if final.status == JobStatus.FAILED else 0


if __name__ == "__main__":
    sys.exit(main())
