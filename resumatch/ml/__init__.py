"""
Machine learning components for resumatch.

- nlp: document extraction and resume parsing
- embeddings: vector providers, embedding service and similarity
"""
