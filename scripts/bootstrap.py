# WORKFLOW: Bootstrap script for building the O*NET document and vector database files.
# Used by: Initial setup, data refreshes after a new O*NET release
# Functions:
# 1. parse_args() - Command line options overriding settings
# 2. run_prepare() - Stage 1: O*NET text tables -> document CSV
# 3. run_embed() - Stage 2: document CSV -> JSON vector database
# 4. main() - Run the selected stages, exit non-zero on any failure
#
# Bootstrap flow: Raw tables -> Documents CSV -> Embeddings -> Vector DB JSON
# Each stage writes its artifact last; a failure leaves the previous artifact untouched.

"""
Bootstrap script for the O*NET document pipeline.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.config import settings  # noqa: E402
from etl import prepare_documents  # noqa: E402
from rag import build_vector_db  # noqa: E402

logger = logging.getLogger("bootstrap")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build O*NET embedding documents and vector database")
    parser.add_argument("--stage", choices=["prepare", "embed", "all"], default="all",
                        help="Pipeline stage to run")
    parser.add_argument("--source-dir", default=settings.source_dir,
                        help="Directory containing the O*NET text files")
    parser.add_argument("--output-dir", default=settings.output_dir,
                        help="Directory for the document CSV and vector database")
    parser.add_argument("--batch-size", type=int, default=settings.embedding_batch_size,
                        help="Documents per embedding batch")
    parser.add_argument("--model", default=settings.embedding_model,
                        help="SentenceTransformer model name")
    parser.add_argument("--log-level", default=settings.log_level,
                        help="Logging level")
    return parser.parse_args(argv)


def run_prepare(args: argparse.Namespace) -> None:
    output_path = Path(args.output_dir) / settings.document_file_name
    prepare_documents.run(source_dir=Path(args.source_dir), output_path=output_path)


def run_embed(args: argparse.Namespace) -> None:
    from rag.embeddings import get_embedding_model

    if args.batch_size < 1:
        raise ValueError(f"--batch-size must be positive, got {args.batch_size}")

    input_path = Path(args.output_dir) / settings.document_file_name
    output_path = Path(args.output_dir) / settings.vector_db_file_name
    model = get_embedding_model(args.model)
    build_vector_db.run(
        input_path=input_path,
        output_path=output_path,
        batch_size=args.batch_size,
        embed_fn=model.encode,
        expected_dimension=model.get_embedding_dimension(),
    )


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    try:
        if args.stage in ("prepare", "all"):
            logger.info("Running document preparation")
            run_prepare(args)
        if args.stage in ("embed", "all"):
            logger.info("Running vector database build")
            run_embed(args)
        logger.info("Bootstrap completed successfully")
        return 0

    except Exception as e:
        logger.error(f"Bootstrap failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
