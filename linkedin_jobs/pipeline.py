"""
Batch pipeline: search LinkedIn and save the results as a dataset.

Ties together scraping, extraction and output with:
  - Optional per-job detail pages, company enrichment and salary estimates
  - Flattened columns (nested salary / company fields become prefix_field)
  - Versioned outputs (Parquet + "latest" copy + CSV)
  - Scrape logs
"""

import os
import json
import logging
import argparse
import pandas as pd
from datetime import datetime
from typing import Optional, Dict, Any, List

from linkedin_jobs.config.settings import settings
from linkedin_jobs.errors import ScraperError
from linkedin_jobs.scraping.fetcher import PageFetcher
from linkedin_jobs.scraping.linkedin_scraper import LinkedInScraper
from linkedin_jobs.scraping.schema import (
    SCHEMA_VERSION,
    get_job_detail_fields,
    get_job_summary_fields,
)
from linkedin_jobs.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# Batch runs are not latency-bound; stay polite between page loads
PIPELINE_MIN_DELAY = 0.5
PIPELINE_MAX_DELAY = 1.0

# Nested record fields flattened by json_normalize
NESTED_FIELDS = ["salary", "company_details"]

# Columns holding lists of strings after flattening
LIST_COLUMNS = ["skills", "company_details_specialties"]


def build_records(
    scraper: LinkedInScraper,
    jobs: List[Dict[str, Any]],
    with_details: bool = False,
    enrich: bool = False,
    estimate_salary: bool = False,
) -> List[Dict[str, Any]]:
    """
    Merge each summary with its detail record when details are requested.

    Detail values override summary values, except where the detail page
    had nothing (None). A job whose detail page fails keeps its summary
    fields only.
    """
    if not with_details:
        return [dict(job) for job in jobs]

    records = []
    for i, job in enumerate(jobs, 1):
        logger.info(f"  [{i}/{len(jobs)}] {job.get('title')} @ {job.get('company')}")
        try:
            detail = scraper.get_job_details(
                job["id"], enrich_company=enrich, estimate_salary=estimate_salary
            )
        except ScraperError as e:
            logger.warning(f"    Detail fetch failed for job {job['id']}: {e}")
            records.append(dict(job))
            continue
        merged = dict(job)
        merged.update({key: value for key, value in detail.items() if value is not None})
        records.append(merged)
    return records


def records_to_dataframe(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Flatten records into one row per job.

    Nested dicts become prefixed columns ("salary_min", "company_details_about").
    Known record fields lead, in schema order; anything else follows.
    """
    prepared = []
    for record in records:
        row = dict(record)
        for field in NESTED_FIELDS:
            if row.get(field) is None:
                row[field] = {}
        prepared.append(row)

    df = pd.json_normalize(prepared, sep="_")

    leading = []
    for col in get_job_summary_fields() + get_job_detail_fields():
        if col in df.columns and col not in leading:
            leading.append(col)
    rest = [col for col in df.columns if col not in leading]
    return df[leading + rest]


def _df_to_parquet(df: pd.DataFrame, path: str) -> None:
    """
    Save DataFrame to Parquet, handling list columns for PyArrow compatibility.

    List columns are converted explicitly to list<string>; rows without a
    list (None or NaN from flattening) become nulls.
    """
    import pyarrow as pa
    import pyarrow.parquet as pq

    arrays = {}
    for col in df.columns:
        if col in LIST_COLUMNS:
            values = [v if isinstance(v, list) else None for v in df[col].tolist()]
            arrays[col] = pa.array(values, type=pa.list_(pa.string()))
        else:
            arrays[col] = pa.array(df[col].tolist(), from_pandas=True)

    table = pa.table(arrays)
    pq.write_table(table, path)


def save_dataset(
    df: pd.DataFrame,
    output_dir: str = "data/processed",
    also_save_csv: bool = True,
) -> Dict[str, str]:
    """
    Save dataset as timestamped Parquet (+ optional CSV).

    Parquet preserves list types; CSV flattens them to JSON strings.

    Returns dict of output file paths.
    """
    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    paths = {}

    parquet_path = os.path.join(output_dir, f"jobs_v{SCHEMA_VERSION}_{timestamp}.parquet")
    _df_to_parquet(df, parquet_path)
    paths["parquet"] = parquet_path
    logger.info(f"Saved Parquet: {parquet_path}")

    latest_parquet = os.path.join(output_dir, "jobs_latest.parquet")
    _df_to_parquet(df, latest_parquet)
    paths["parquet_latest"] = latest_parquet

    if also_save_csv:
        csv_path = os.path.join(output_dir, f"jobs_v{SCHEMA_VERSION}_{timestamp}.csv")
        df_csv = df.copy()
        for col in LIST_COLUMNS:
            if col in df_csv.columns:
                df_csv[col] = df_csv[col].apply(
                    lambda x: json.dumps(x) if isinstance(x, list) else x
                )
        df_csv.to_csv(csv_path, index=False)
        paths["csv"] = csv_path
        logger.info(f"Saved CSV: {csv_path}")

    return paths


def run_pipeline(
    keywords: str = "Data Scientist",
    location: str = "",
    limit: int = 25,
    remote: bool = False,
    with_details: bool = False,
    enrich: bool = False,
    estimate_salary: bool = False,
    output_dir: str = "data/processed",
    save_csv: bool = True,
    scraper: Optional[LinkedInScraper] = None,
) -> Optional[pd.DataFrame]:
    """
    Run search (+ optional details) and save the flattened dataset.

    Args:
        keywords: Job search query
        location: Location filter (empty string = worldwide)
        limit: Max jobs to collect (1-25, one results page)
        remote: Only remote jobs
        with_details: Fetch each job's detail page
        enrich: Add company profiles
        estimate_salary: Estimate salaries for jobs without one (needs details)
        output_dir: Directory for processed output
        save_csv: Also save CSV alongside Parquet
        scraper: Scraper to use; a polite batch scraper is built when omitted

    Returns:
        Flattened DataFrame, or None when the search found nothing.
    """
    logger.info("=" * 60)
    logger.info("LinkedIn Jobs: batch collection")
    logger.info(f"Schema version: {SCHEMA_VERSION}")
    logger.info(f"Search: '{keywords}' | Location: '{location}' | Limit: {limit}")
    logger.info("=" * 60)

    owns_scraper = scraper is None
    if scraper is None:
        scraper = LinkedInScraper(
            fetcher=PageFetcher(
                timeout=settings.REQUEST_TIMEOUT,
                max_retries=settings.MAX_RETRIES,
                min_delay=PIPELINE_MIN_DELAY,
                max_delay=PIPELINE_MAX_DELAY,
            )
        )

    try:
        result = scraper.search_jobs(
            keywords,
            location=location,
            remote=remote,
            limit=limit,
            enrich_companies=enrich and not with_details,
        )
        jobs = result["jobs"]
        if not jobs:
            logger.error("No listings found. Pipeline aborted.")
            return None

        records = build_records(
            scraper, jobs, with_details=with_details, enrich=enrich,
            estimate_salary=estimate_salary,
        )
    finally:
        if owns_scraper:
            scraper.close()

    df = records_to_dataframe(records)
    paths = save_dataset(df, output_dir, save_csv)

    logger.info("=" * 60)
    logger.info("PIPELINE COMPLETE")
    logger.info(f"Records: {len(df)} (of {result.get('total_results') or 'unknown'} matching)")
    logger.info(f"Output: {paths}")
    logger.info("=" * 60)

    return df


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Collect LinkedIn job listings into a dataset.")
    parser.add_argument("--keywords", default="Data Scientist", help="Job search keywords")
    parser.add_argument("--location", default="", help="Location filter")
    parser.add_argument("--limit", type=int, default=25, help="Number of jobs (1-25)")
    parser.add_argument("--remote", action="store_true", help="Only remote jobs")
    parser.add_argument("--details", action="store_true", help="Fetch each job's detail page")
    parser.add_argument("--enrich", action="store_true", help="Add company profiles")
    parser.add_argument(
        "--estimate-salary", action="store_true",
        help="Estimate salaries when none is posted (with --details)",
    )
    parser.add_argument("--output-dir", default="data/processed", help="Output directory")
    parser.add_argument("--log-dir", default="outputs/logs", help="Log file directory")
    parser.add_argument("--no-csv", action="store_true", help="Skip the CSV copy")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point. Returns a process exit code."""
    args = parse_args(argv)
    log_path = setup_logging(settings.LOG_LEVEL, log_dir=args.log_dir)
    logger.info(f"Log: {log_path}")

    df = run_pipeline(
        keywords=args.keywords,
        location=args.location,
        limit=args.limit,
        remote=args.remote,
        with_details=args.details,
        enrich=args.enrich,
        estimate_salary=args.estimate_salary,
        output_dir=args.output_dir,
        save_csv=not args.no_csv,
    )
    return 0 if df is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
