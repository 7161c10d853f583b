import os
import warnings

# Silence native-library chatter before torch/umap are imported
_ = os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "2")
_ = os.environ.setdefault("TOKENIZERS_PARALLELISM", "false")
warnings.filterwarnings("ignore", category=FutureWarning)

from ingestion.cli import main as _cli_main  # noqa: E402

__all__ = ["main"]


def main() -> None:
    """Compatibility wrapper that delegates to `ingestion.cli.main`."""
    _cli_main()


if __name__ == "__main__":
    main()
