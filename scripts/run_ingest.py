"""
Demo script: parse the sample DSV files via the public API.

Usage:
    python scripts/run_ingest.py              # reuse existing configs
    python scripts/run_ingest.py --regenerate # rewrite configs first

Each input file gets its own YAML config and output file under outputs/.
On first run a default config is generated next to the outputs (you can
edit it to name columns or pick key columns); subsequent runs reuse it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

INPUT_FILES = [
    "inputs/passwd.dsv",
    "inputs/group.dsv",
]

OUTPUT_ROOT = Path("outputs")

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_ingest")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import pandas as pd

    import unix_dsv
    from unix_dsv.config import generate_default_config, save_config

    regenerate = "--regenerate" in sys.argv

    for input_path in INPUT_FILES:
        if not Path(input_path).exists():
            log.warning("SKIP  %s  (file not found)", input_path)
            continue

        name = Path(input_path).stem
        config_path = OUTPUT_ROOT / f"{name}.yaml"

        log.info("=" * 70)
        log.info("Processing: %s", input_path)
        log.info("  config_path : %s", config_path)
        log.info("=" * 70)

        if regenerate or not config_path.exists():
            config = generate_default_config(input_path, output_dir=str(OUTPUT_ROOT))
            save_config(config, config_path)

        written = unix_dsv.ingest(config_path)
        df = pd.read_parquet(written) if written.endswith(".parquet") else pd.read_csv(written)
        log.info("  Table '%s': %s rows x %d cols", name, f"{len(df):,}", len(df.columns))

        log.info("Done: %s\n", name)

    log.info("All files processed.")


if __name__ == "__main__":
    main()
