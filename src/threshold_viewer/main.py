"""Command-line entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from threshold_viewer.api.client import ProcessingClient
from threshold_viewer.api.health import HealthProbe
from threshold_viewer.api.schemas import UIState
from threshold_viewer.core.config import ADVISORY_EXTENSIONS, ClientConfig
from threshold_viewer.core.files import SelectedFile
from threshold_viewer.processing.channel import EventChannel
from threshold_viewer.processing.controller import UploadController
from threshold_viewer.ui.loading import LoadingIndicator
from threshold_viewer.ui.status import StatusNotifier
from threshold_viewer.ui.view import ConsoleView

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="threshold-viewer",
        description="Send an image to the thresholding service and save the original and processed images side by side.",
    )
    parser.add_argument("image", type=Path, help=f"Image to process ({', '.join(ADVISORY_EXTENSIONS)} recommended)")
    parser.add_argument("--base-url", default=None, help="Processing service URL (default: $THRESHOLD_SERVICE_URL or http://localhost:8080)")
    parser.add_argument("--output", type=Path, default=None, help="Where to write the side-by-side comparison")
    parser.add_argument("--save-processed", type=Path, default=None, help="Where to write the processed image alone")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


async def run(
    args: argparse.Namespace,
    view: ConsoleView | None = None,
    http: httpx.AsyncClient | None = None,
) -> int:
    config = ClientConfig(base_url=args.base_url) if args.base_url else ClientConfig.from_env()
    view = view or ConsoleView()
    notifier = StatusNotifier(sink=view.show_status)

    async with ProcessingClient(config, http=http) as client:
        probe = HealthProbe(notifier, config, http=http)
        controller = UploadController(
            client,
            notifier=notifier,
            loading=LoadingIndicator(on_toggle=view.set_loading),
            on_change=view.render,
        )
        channel = EventChannel(maxsize=config.channel_size)

        # The probe is advisory; selection goes ahead regardless of its outcome
        consumer = asyncio.create_task(controller.run(channel))
        await probe.run()
        await channel.send(SelectedFile.from_path(args.image))
        await channel.close()
        await consumer

    state = controller.snapshot()
    if state.ui_state is not UIState.SUCCEEDED:
        return 1

    if args.save_processed is not None and view.save_processed(state, args.save_processed):
        logger.info("Processed image written to %s", args.save_processed)
    if args.output is not None and view.save_comparison(state, args.output):
        logger.info("Comparison written to %s", args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not args.image.is_file():
        print(f"No such file: {args.image}", file=sys.stderr)
        return 1
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
