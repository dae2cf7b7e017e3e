"""Draw the static sample file the walkthrough reads from the full US weather events CSV."""
import argparse
import logging
import os
import time

import pandas as pd

from weatherevents.constants import RAW_REQUIRED_COLS
from weatherevents.data_loader import DATA_PATH

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# The full file is several million rows; read it in pieces
CHUNK_SIZE = 500_000
DEFAULT_ROWS = 100_000
SEED = 42


def filter_chunk(chunk, states=None, years=None):
    """Keep rows from the requested states and start years."""
    mask = pd.Series(True, index=chunk.index)
    if states:
        mask &= chunk["State"].isin(states)
    if years:
        start_year = pd.to_datetime(chunk["StartTime(UTC)"], errors="coerce").dt.year
        mask &= start_year.isin(years)
    return chunk[mask]


def collect_rows(source, states=None, years=None, chunk_size=CHUNK_SIZE):
    """Stream the source file and concatenate the rows that pass the filters."""
    kept = []
    total = 0
    reader = pd.read_csv(source, chunksize=chunk_size, dtype={"ZipCode": str, "EventId": str})
    for i, chunk in enumerate(reader):
        if i == 0:
            missing = [c for c in RAW_REQUIRED_COLS if c not in chunk.columns]
            if missing:
                raise ValueError(f"{source} is missing columns: {', '.join(missing)}")
        total += len(chunk)
        kept.append(filter_chunk(chunk, states, years))
        logger.info("Read chunk %d (%s rows so far)", i + 1, f"{total:,}")
    if not kept:
        raise ValueError(f"{source} contains no rows")
    rows = pd.concat(kept, ignore_index=True)
    logger.info("%s of %s rows match the filters", f"{len(rows):,}", f"{total:,}")
    return rows


def draw_sample(rows, n_rows=DEFAULT_ROWS, seed=SEED):
    """Reproducible random sample, keeping source order; all rows if n_rows is larger."""
    if n_rows >= len(rows):
        logger.warning("Requested %s rows but only %s available; keeping all",
                       f"{n_rows:,}", f"{len(rows):,}")
        return rows.copy()
    return rows.sample(n=n_rows, random_state=seed).sort_index()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", help="Path to the full weather events CSV")
    parser.add_argument("-o", "--output", default=DATA_PATH,
                        help="Where to write the sample (default: %(default)s)")
    parser.add_argument("-n", "--rows", type=int, default=DEFAULT_ROWS,
                        help="Number of rows to sample (default: %(default)s)")
    parser.add_argument("--states", nargs="*", help="Two-letter state codes to keep")
    parser.add_argument("--years", nargs="*", type=int, help="Start years to keep")
    parser.add_argument("--seed", type=int, default=SEED)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    start = time.time()
    logger.info("Sampling %s rows from %s", f"{args.rows:,}", args.source)

    rows = collect_rows(args.source, states=args.states, years=args.years)
    sample = draw_sample(rows, n_rows=args.rows, seed=args.seed)

    out_dir = os.path.dirname(os.path.abspath(args.output))
    os.makedirs(out_dir, exist_ok=True)
    sample.to_csv(args.output, index=False)
    logger.info("Wrote %s rows to %s in %.1fs", f"{len(sample):,}", args.output, time.time() - start)
    return sample


if __name__ == "__main__":
    main()
