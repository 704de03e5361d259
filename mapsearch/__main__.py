"""Allow running the search job with ``python -m mapsearch``."""

from mapsearch.jobs.run_search import main

if __name__ == "__main__":
    raise SystemExit(main())
