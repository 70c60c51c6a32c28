# ==============================================
# Mistake Pattern Analyzer
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# mistake_analyzer/
# ├── records/              # Topic 1: Mistake records, severity, input validation
# ├── analysis/             # Topic 2: Category detection & pattern analysis
# ├── storage/              # Topic 3: Flat-file persistence + in-memory store
# ├── config.py             # Configuration management
# ├── errors.py             # Exception types
# ├── track_and_analyze.py  # Final orchestrator class
# └── cli.py                # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
