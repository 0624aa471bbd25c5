"""Command line entry points for the purchase insights queries."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Callable, Sequence

import pandas as pd

from purchase_insights.analyses.customer_purchases import (
    get_customer_purchase_details,
)
from purchase_insights.analyses.customer_summary import SortOrder, summarize_customers
from purchase_insights.analyses.purchase_frequency import calculate_purchase_frequency
from purchase_insights.foundation import (
    JsonFileDataSource,
    QueryError,
    dataset_to_payload,
    parse_date_range,
)
from purchase_insights.pandas import (
    customer_summaries_to_dataframe,
    frequency_to_dataframe,
    purchase_details_to_dataframe,
)
from purchase_insights.synthetic import SyntheticConfig, generate_dataset

logger = logging.getLogger(__name__)

EXIT_QUERY_ERROR = 2


def _resolve_output(path: Path) -> Path:
    output_path = path.resolve()
    cwd = Path.cwd().resolve()
    try:
        output_path.relative_to(cwd)
    except ValueError:
        raise ValueError(
            f"Output path {output_path} must reside within the current working directory"
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def _emit(
    rows: list[dict[str, Any]], frame: Callable[[], pd.DataFrame], output: Path | None
) -> None:
    if output is None:  # stdout fallback enables piping in shell usage.
        json.dump(rows, fp=sys.stdout, indent=2, ensure_ascii=False)
        print()
        return

    output_path = _resolve_output(output)
    if output_path.suffix.lower() == ".csv":
        frame().to_csv(output_path, index=False)
    else:
        with output_path.open("w", encoding="utf-8") as fh:
            json.dump(rows, fh, indent=2, ensure_ascii=False)
    logger.info(f"Wrote {len(rows)} rows to {output_path}")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "dataset",
        type=Path,
        help="Path to JSON file with customers, products and purchases",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional output path; a .csv suffix writes CSV, anything else JSON.",
    )


def purchase_frequency_cli(argv: list[str] | None = None) -> int:
    """Print quantity-weighted purchase counts per price band."""

    parser = argparse.ArgumentParser(description=purchase_frequency_cli.__doc__)
    _add_common_arguments(parser)
    parser.add_argument(
        "--from",
        dest="from_",
        help="Window start (ISO 8601 date or date-time). Requires --to.",
    )
    parser.add_argument(
        "--to",
        help="Window end, inclusive (ISO 8601 date or date-time). Requires --from.",
    )
    args = parser.parse_args(argv)

    try:
        date_range = parse_date_range(args.from_, args.to)
        dataset = JsonFileDataSource(args.dataset).snapshot()
        buckets = calculate_purchase_frequency(
            dataset.purchases, dataset.products, date_range
        )
    except QueryError as exc:
        logger.error(f"Purchase frequency query failed: {exc}")
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_QUERY_ERROR

    rows = [{"range": bucket.range, "count": bucket.count} for bucket in buckets]
    _emit(rows, lambda: frequency_to_dataframe(buckets), args.output)
    return 0


def customer_summaries_cli(argv: list[str] | None = None) -> int:
    """Print per-customer purchase count and total amount."""

    parser = argparse.ArgumentParser(description=customer_summaries_cli.__doc__)
    _add_common_arguments(parser)
    parser.add_argument(
        "--sort",
        default=SortOrder.ID.value,
        choices=[order.value for order in SortOrder],
        help="Order by id (default) or by total amount ascending/descending.",
    )
    parser.add_argument(
        "--name",
        help="Only include customers whose name contains this text (case-sensitive).",
    )
    args = parser.parse_args(argv)

    try:
        dataset = JsonFileDataSource(args.dataset).snapshot()
        summaries = summarize_customers(
            dataset.customers,
            dataset.purchases,
            dataset.products,
            name_filter=args.name,
            sort_order=args.sort,
        )
    except QueryError as exc:
        logger.error(f"Customer summary query failed: {exc}")
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_QUERY_ERROR

    rows = [
        {
            "id": summary.id,
            "name": summary.name,
            "totalPurchases": summary.total_purchases,
            "totalAmount": summary.total_amount,
        }
        for summary in summaries
    ]
    _emit(rows, lambda: customer_summaries_to_dataframe(summaries), args.output)
    return 0


def customer_purchases_cli(argv: list[str] | None = None) -> int:
    """Print the purchase history of one customer."""

    parser = argparse.ArgumentParser(description=customer_purchases_cli.__doc__)
    _add_common_arguments(parser)
    parser.add_argument("customer_id", help="Customer identifier")
    args = parser.parse_args(argv)

    try:
        dataset = JsonFileDataSource(args.dataset).snapshot()
        details = get_customer_purchase_details(
            args.customer_id,
            dataset.customers,
            dataset.purchases,
            dataset.products,
        )
    except QueryError as exc:
        logger.error(f"Customer purchase query failed: {exc}")
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_QUERY_ERROR

    rows = [
        {
            "id": detail.id,
            "customerId": detail.customer_id,
            "productId": detail.product_id,
            "productName": detail.product_name,
            "price": detail.price,
            "purchaseDate": detail.purchase_date.isoformat(),
            "thumbnail": detail.thumbnail,
        }
        for detail in details
    ]
    _emit(rows, lambda: purchase_details_to_dataframe(details), args.output)
    return 0


def generate_dataset_cli(argv: list[str] | None = None) -> int:
    """Write a synthetic dataset JSON file usable by the query commands."""

    parser = argparse.ArgumentParser(description=generate_dataset_cli.__doc__)
    parser.add_argument("output", type=Path, help="Path of the JSON file to write")
    parser.add_argument("--customers", type=int, default=50)
    parser.add_argument("--products", type=int, default=30)
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=date(2024, 1, 1),
        help="First purchase date (YYYY-MM-DD, default: 2024-01-01)",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=date(2024, 12, 31),
        help="Last purchase date (YYYY-MM-DD, default: 2024-12-31)",
    )
    parser.add_argument(
        "--purchases-per-customer",
        type=float,
        default=4.0,
        help="Average purchase records per customer (default: 4.0)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    args = parser.parse_args(argv)

    config = SyntheticConfig(
        n_customers=args.customers,
        n_products=args.products,
        start=args.start,
        end=args.end,
        purchases_per_customer=args.purchases_per_customer,
        seed=args.seed,
    )
    dataset = generate_dataset(config)

    output_path = _resolve_output(args.output)
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump(dataset_to_payload(dataset), fh, indent=2, ensure_ascii=False)

    logger.info(
        f"Generated {len(dataset.customers)} customers, {len(dataset.products)} products "
        f"and {len(dataset.purchases)} purchases into {output_path}"
    )
    return 0


COMMANDS: dict[str, Callable[[list[str] | None], int]] = {
    "frequency": purchase_frequency_cli,
    "customers": customer_summaries_cli,
    "purchases": customer_purchases_cli,
    "generate": generate_dataset_cli,
}


def run(argv: Sequence[str] | None = None) -> int:
    """Dispatch ``purchase-insights <command> ...`` to the matching entry point."""

    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in COMMANDS:
        names = ", ".join(COMMANDS)
        print(f"usage: purchase-insights {{{names}}} ...", file=sys.stderr)
        return 1
    return COMMANDS[args[0]](args[1:])


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
