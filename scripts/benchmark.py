#!/usr/bin/env python3
"""Benchmark script for the book API."""

import argparse
import statistics
import time
import uuid

import httpx

OPERATIONS = ["create", "get", "update", "list", "delete"]


def summarize(latencies: list[float]) -> dict:
    """Return latency statistics in milliseconds."""
    return {
        "min": min(latencies),
        "max": max(latencies),
        "mean": statistics.mean(latencies),
        "median": statistics.median(latencies),
        "stdev": statistics.stdev(latencies) if len(latencies) > 1 else 0,
        "p95": sorted(latencies)[int(len(latencies) * 0.95)],
    }


def benchmark_books(base_url: str, num_books: int) -> dict:
    """Run a full CRUD cycle per book and return statistics per operation."""
    latencies: dict[str, list[float]] = {op: [] for op in OPERATIONS}
    errors = 0
    run_id = uuid.uuid4().hex[:8]

    print(f"Benchmarking {num_books} book lifecycles...")
    print()

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        for i in range(num_books):
            isbn = f"bench-{run_id}-{i}"
            book = {
                "title": f"Benchmark Book {i}",
                "author": "Benchmark",
                "isbn": isbn,
                "price": 10.0 + i,
                "url": f"https://example.com/{isbn}",
            }
            requests = [
                ("create", "POST", "/books", book, 201),
                ("get", "GET", f"/books/{isbn}", None, 200),
                ("update", "PUT", f"/books/{isbn}", {**book, "title": "Updated"}, 200),
                ("list", "GET", "/books", None, 200),
                ("delete", "DELETE", f"/books/{isbn}", None, 200),
            ]
            for op, method, path, body, expected in requests:
                try:
                    start = time.perf_counter()
                    response = client.request(method, path, json=body)
                    elapsed = (time.perf_counter() - start) * 1000  # ms

                    if response.status_code == expected:
                        latencies[op].append(elapsed)
                    else:
                        errors += 1
                        print(f"  Book {i + 1} {op}: ERROR ({response.status_code})")

                except httpx.HTTPError as e:
                    errors += 1
                    print(f"  Book {i + 1} {op}: EXCEPTION ({e})")

            print(f"  Book {i + 1}: done")

    if not any(latencies.values()):
        return {"error": "All requests failed"}

    return {
        "total_requests": num_books * len(OPERATIONS),
        "failed_requests": errors,
        "latency_ms": {op: summarize(values) for op, values in latencies.items() if values},
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark the book API")
    parser.add_argument(
        "--url",
        default="http://localhost:3000",
        help="Base URL of the book API",
    )
    parser.add_argument(
        "--books",
        type=int,
        default=20,
        help="Number of create/get/update/list/delete cycles to run",
    )

    args = parser.parse_args()

    print("=" * 50)
    print("Book API Benchmark")
    print("=" * 50)
    print()

    results = benchmark_books(base_url=args.url, num_books=args.books)

    print()
    print("=" * 50)
    print("Results")
    print("=" * 50)
    print()

    if "error" in results:
        print(f"Error: {results['error']}")
        return

    print(f"Total requests:      {results['total_requests']}")
    print(f"Failed:              {results['failed_requests']}")
    for op, stats in results["latency_ms"].items():
        print()
        print(f"{op.capitalize()} latency (ms):")
        print(f"  Min:               {stats['min']:.2f}")
        print(f"  Max:               {stats['max']:.2f}")
        print(f"  Mean:              {stats['mean']:.2f}")
        print(f"  Median:            {stats['median']:.2f}")
        print(f"  Std Dev:           {stats['stdev']:.2f}")
        print(f"  P95:               {stats['p95']:.2f}")


if __name__ == "__main__":
    main()
