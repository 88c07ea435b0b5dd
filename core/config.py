# WORKFLOW: Core configuration management for the O*NET document pipeline.
# Used by: All modules throughout the application
# Configuration includes:
# - Source and output locations (O*NET text tables, intermediate CSV, vector DB)
# - Per-file malformed line policy
# - Embedding settings (model, cache directory, batch size)
# - Logging configuration
#
# Loaded at startup and used by both pipeline stages for consistent configuration.

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Locations
    source_dir: str = "./data/db_25_0_text"
    output_dir: str = "./public/data"
    document_file_name: str = "onet_25-0_embedding.csv"
    vector_db_file_name: str = "onet_25-0_vectordb.json"

    # Parsing
    # Files listed here tolerate malformed lines; all others fail on the first one
    skip_malformed_files: List[str] = ["Emerging Tasks.txt"]

    # Embeddings
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    model_cache_dir: str = "./.cache/huggingface"
    embedding_batch_size: int = 16

    # Verification
    sample_soc_code: str = "15-1111.00"

    # Logging
    log_level: str = "INFO"

    @property
    def document_csv_path(self) -> Path:
        return Path(self.output_dir) / self.document_file_name

    @property
    def vector_db_path(self) -> Path:
        return Path(self.output_dir) / self.vector_db_file_name

    class Config:
        env_file = ".env"
        env_prefix = "ONET_"
        case_sensitive = False


settings = Settings()
