"""Write the dashboard's summaries to CSV (and optionally PNG) for offline use.

Outputs in --out:
  known_groups.csv, open_groups.csv, claim_counts.csv  (claims file)
  verdicts.csv, timeline.csv                           (timeline file)
  known_groups.png, timeline.png                       (with --png)
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, Optional

from lonerbox_data.aggregate import AggregationConfig, aggregate
from lonerbox_data.config import CLAIMS_DATASET, DEFAULT_CATEGORIES, TIMELINE_DATASET
from lonerbox_data.layout import bar_layout, timeline_layout
from lonerbox_data.loader import load_records
from lonerbox_data.logs import configure_logging
from lonerbox_data.tables import claims_frame, groups_frame, timeline_frame, verdicts_frame


def plot_known_groups(layout, save_path: Path) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(
        [b.category for b in layout.bars],
        [b.value for b in layout.bars],
        color=[b.color for b in layout.bars],
        edgecolor="black",
    )
    ax.set_ylim(*layout.y_scale.domain)
    ax.set_yticks(layout.y_scale.ticks())
    ax.set_title("Deaths by Orient Affiliation")
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    fig.tight_layout()
    fig.savefig(save_path, dpi=200)
    plt.close(fig)


def plot_timeline(layout, save_path: Path) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(20, 5))
    for category, color in layout.legend:
        mine = [b for b in layout.bars if b.category == category]
        ax.bar(
            [b.x for b in mine],
            [b.count for b in mine],
            width=[b.width for b in mine],
            align="edge",
            color=color,
            label=category,
        )
    ax.set_xticks([x for x, _ in layout.ticks])
    ax.set_xticklabels([t for _, t in layout.ticks])
    ax.set_ylim(*layout.y_scale.domain)
    ax.set_title("Deaths Timeline")
    if layout.legend:
        ax.legend(loc="upper right")
    fig.tight_layout()
    fig.savefig(save_path, dpi=200)
    plt.close(fig)


def export_summaries(claims_path: str, timeline_path: str, out_dir: str, png: bool = False) -> Dict[str, Path]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    claims = load_records(claims_path)
    claim_summary = aggregate(
        claims, AggregationConfig.for_dataset(CLAIMS_DATASET, sort_by="label")
    )
    timeline = load_records(timeline_path)
    timeline_summary = aggregate(timeline, AggregationConfig.for_dataset(TIMELINE_DATASET))

    written = {
        "known_groups": out / "known_groups.csv",
        "open_groups": out / "open_groups.csv",
        "claim_counts": out / "claim_counts.csv",
        "verdicts": out / "verdicts.csv",
        "timeline": out / "timeline.csv",
    }
    groups_frame(claim_summary.known_groups).to_csv(written["known_groups"], index=False)
    groups_frame(claim_summary.open_groups).to_csv(written["open_groups"], index=False)
    claims_frame(claim_summary.claim_counts).to_csv(written["claim_counts"], index=False)
    verdicts_frame(timeline_summary.verdicts).to_csv(written["verdicts"], index=False)
    timeline_frame(timeline_summary.time_buckets).to_csv(written["timeline"], index=False)

    if png:
        bars = bar_layout(
            [(g.category, g.total) for g in claim_summary.known_groups],
            DEFAULT_CATEGORIES.color_for,
        )
        written["known_groups_png"] = out / "known_groups.png"
        plot_known_groups(bars, written["known_groups_png"])

        written["timeline_png"] = out / "timeline.png"
        plot_timeline(timeline_layout(timeline_summary.time_buckets), written["timeline_png"])

    print(f"Claims records: {claim_summary.record_count}")
    print(f"Timeline records: {timeline_summary.record_count}")
    for path in written.values():
        print(f"Wrote: {path}")
    return written


def main(argv: Optional[list] = None):
    p = argparse.ArgumentParser(description="Export Lonerbox Data summaries to CSV/PNG.")
    p.add_argument("--claims", default=CLAIMS_DATASET.path(), help="Claims CSV (path or URL).")
    p.add_argument("--timeline", default=TIMELINE_DATASET.path(), help="Timeline CSV (path or URL).")
    p.add_argument("--out", default=str(Path("output")))
    p.add_argument("--png", action="store_true", help="Also render static PNG charts.")
    p.add_argument("--log-level", default=None)
    args = p.parse_args(argv)

    configure_logging(args.log_level)
    export_summaries(args.claims, args.timeline, args.out, png=args.png)


if __name__ == "__main__":
    main()
