"""Command line entry point: import a dataset and stream batches from it."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from mictk.data import available_importers, get_importer
from mictk.data.loaders.mnist_patch import build_fixture
from mictk.encoders import MatrixEncoder
from mictk.errors import MictkError
from mictk.layers import ReLU
from mictk.reporting import save_batch_grid, write_manifest

logger = logging.getLogger("mictk.cli")


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--importer",
        default="mnist_patch",
        help="Registered importer to use",
    )
    parser.add_argument("--node-name", help="Config node to read importer properties from")
    parser.add_argument("--config", type=Path, help="JSON/YAML property file")
    parser.add_argument(
        "--fixture",
        type=Path,
        help="Build the offline MNIST fixture in this directory and import it",
    )
    parser.add_argument(
        "--mode",
        choices=["next", "random"],
        default="next",
        help="Sequential or random batch retrieval",
    )
    parser.add_argument("--batches", type=int, default=1, help="Number of batches to emit")
    parser.add_argument("--batch-size", type=int, help="Override the configured batch size")
    parser.add_argument("--seed", type=int, help="Seed of the importer's generator")
    parser.add_argument(
        "--encode", action="store_true", help="Encode every sample into an SDR"
    )
    parser.add_argument(
        "--relu", action="store_true", help="Push every batch through a ReLU layer"
    )
    parser.add_argument("--plot", type=Path, help="Save a tile grid of the first batch")
    parser.add_argument("--manifest", type=Path, help="Write a JSON run manifest")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--list-importers", action="store_true", help="List registered importers and exit"
    )
    return parser.parse_args(argv)


def _build_importer(args: argparse.Namespace):
    options: dict = {}
    if args.node_name:
        options["node_name"] = args.node_name
    if args.config:
        options["config_path"] = args.config
    if args.fixture:
        images, labels = build_fixture(args.fixture)
        options["data_filename"] = str(images)
        options["labels_filename"] = str(labels)
    if args.batch_size is not None:
        options["batch_size"] = args.batch_size
    if args.seed is not None:
        options["seed"] = args.seed
    try:
        return get_importer(args.importer, **options)
    except KeyError as exc:
        raise SystemExit(str(exc)) from None


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_importers:
        for name in available_importers():
            print(name)
        raise SystemExit(0)

    importer = _build_importer(args)
    result = importer.import_data()
    if not result:
        raise SystemExit(f"Import failed: {result.error}")

    encoder = None
    relu = None
    for step in range(args.batches):
        try:
            batch = (
                importer.get_next_batch() if args.mode == "next" else importer.get_random_batch()
            )
        except MictkError as exc:
            raise SystemExit(f"Batch {step} failed: {exc}") from None
        record = {
            "batch": step,
            "indices": batch.indices,
            "labels": [int(label) for label in batch.labels],
        }
        if args.encode:
            first = np.asarray(batch[0].data)
            if encoder is None:
                encoder = MatrixEncoder(first.size, *first.shape)
            sdrs = encoder.encode_batch(batch.data)
            record["sdr_length"] = sdrs[0].rows
        if args.relu:
            columns = batch.to_columns()
            if relu is None or relu.batch_size != columns.cols:
                relu = ReLU(columns.rows, columns.rows, columns.cols)
            relu.s["x"].copy_from(columns)
            relu.forward()
            record["active_fraction"] = float((relu.s["y"].values > 0).mean())
        if step == 0 and args.plot:
            save_batch_grid(batch, args.plot, title=f"{importer.node_name} batch 0")
        print(json.dumps(record, sort_keys=True))

    if args.manifest:
        write_manifest(args.manifest, importer, mode=args.mode, batches=args.batches)
        logger.info("Wrote manifest to %s", args.manifest)


if __name__ == "__main__":
    main()
