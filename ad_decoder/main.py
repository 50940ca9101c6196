import sys
import time
import logging
from pathlib import Path

from ad_decoder.exporters.ad_exporter import ADExporter
from ad_decoder.utils.ad_filter import ADFilter
from ad_decoder.utils.handlers import parse_payloads_iter
from ad_decoder.utils.payload_file_reader import PayloadFileReader


def main(argv=None):
    # ============================================================
    # LOGGING CONFIGURATION
    # ============================================================
    LOG_LEVEL = logging.WARNING

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("ad_decoder").setLevel(LOG_LEVEL)

    # ============================================================
    # PATHS
    # ============================================================
    args = sys.argv[1:] if argv is None else argv
    base_dir = Path(__file__).resolve().parent.parent
    input_file = Path(args[0]) if args else base_dir / "data" / "samples" / "advertisements.txt"
    output_dir = base_dir / "data" / "output"
    output_csv = Path(args[1]) if len(args) > 1 else output_dir / "ad_structures.csv"
    output_csv.parent.mkdir(parents=True, exist_ok=True)

    print(f"\n{'=' * 70}")
    print("BLE Advertising Payload Decoder")
    print(f"{'=' * 70}")
    print(f"Input file: {input_file}")
    print(f"{'=' * 70}\n")

    if not input_file.exists():
        print(f"ERROR: input file not found: {input_file}")
        return 1

    start = time.perf_counter()

    captured = list(PayloadFileReader(str(input_file)).read_payloads())
    decoded = parse_payloads_iter(payload.raw for payload in captured)
    df = ADExporter.payloads_to_dataframe(
        (payload.line_number, structures) for payload, structures in zip(captured, decoded)
    )

    elapsed = time.perf_counter() - start
    print(f"Payloads read:       {len(captured):,}")
    print(f"AD structures:       {len(df):,}")
    print(f"Beacon structures:   {len(ADFilter.filter_beacons(df)):,}")
    print(f"Decoding time:       {elapsed:.3f} s\n")

    ADExporter.export_to_csv(df, str(output_csv))
    return 0


if __name__ == "__main__":
    sys.exit(main())
