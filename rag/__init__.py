# WORKFLOW: Embedding package for the O*NET vector database.
# Used by: Vector DB build stage
# Modules include:
# 1. embeddings.py - SentenceTransformer embedding model
# 2. batch_embedder.py - Order-preserving batched embedding
# 3. vector_store.py - Flat JSON vector database writer and reader
# 4. build_vector_db.py - Stage 2 orchestration
#
# Flow: Document CSV -> Batches -> Embeddings -> Vector DB JSON

"""
Embedding and vector database package.
"""
