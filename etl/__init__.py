# WORKFLOW: ETL (Extract, Transform, Load) package for O*NET occupation documents.
# Used by: Document preparation stage, vector DB build stage
# Modules include:
# 1. tsv_parser.py - Parse tab-delimited O*NET tables into rows
# 2. sources.py - Typed per-table records and required file registry
# 3. aggregation.py - Group repeated values by SOC code
# 4. document_composer.py - Merge aggregates and render embedding text
# 5. csv_writer.py - Write and read back the intermediate document CSV
# 6. prepare_documents.py - Stage 1 orchestration
#
# ETL flow: TSV tables -> Parse -> Aggregate -> Compose -> Document CSV
# The document CSV is the input of the vector database build in rag/.

"""
ETL package for O*NET occupation document preparation.
"""
