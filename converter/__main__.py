"""
Entry point for running the converter as a module.

Usage:
    python -m converter export schedule-db.json -o public/course-data-constructed.json
    python -m converter validate public/course-data-constructed.json
    python -m converter summary schedule-db.json
"""

from converter.cli import main

if __name__ == "__main__":
    main()
