"""
Batch resume import.

Each document is extracted and parsed on its own; successful profiles are
embedded together and saved. A bad document or a failed embedding is
recorded against that item and the rest of the batch carries on.
"""

from typing import Iterable, Optional

from resumatch.data.models import Document, ImportReport, ParsedProfile, SkippedItem
from resumatch.data.repositories import MatchingStore
from resumatch.ml.embeddings import EmbeddingService, get_embedding_service
from resumatch.ml.nlp import ResumeParser, get_resume_parser
from resumatch.utils.exceptions import DocumentError, EmbeddingUnavailableError, EmptyInputError
from resumatch.utils.logger import LoggerMixin, audit_log


class ResumeImporter(LoggerMixin):
    """Extracts, parses, embeds and stores a batch of resume documents."""

    def __init__(
        self,
        store: MatchingStore,
        parser: Optional[ResumeParser] = None,
        embedding_service: Optional[EmbeddingService] = None,
    ):
        self.store = store
        self.parser = parser or get_resume_parser()
        self.embedding_service = embedding_service or get_embedding_service()

    def _parse(self, document: Document) -> ParsedProfile:
        profile = self.parser.parse_document(document)
        if not profile.raw_text.strip():
            raise EmptyInputError("No text could be extracted", filename=document.filename)
        return profile

    async def import_documents(self, documents: Iterable[Document]) -> ImportReport:
        """
        Import a batch of documents.

        Returns:
            ImportReport listing saved profiles and failed documents

        Raises:
            DimensionMismatchError: the embedding provider is misconfigured
            StorageError: the store rejected a write
        """
        parsed: list[ParsedProfile] = []
        failed: list[SkippedItem] = []

        for document in documents:
            try:
                parsed.append(self._parse(document))
            except DocumentError as exc:
                self.logger.warning(f"Skipping {document.filename or 'document'}: {exc.message}")
                failed.append(SkippedItem(item_id=document.filename, reason=exc.message))

        outcomes = await self.embedding_service.embed_many([p.raw_text for p in parsed])

        imported: list[ParsedProfile] = []
        for profile, outcome in zip(parsed, outcomes):
            if isinstance(outcome, EmbeddingUnavailableError):
                self.logger.warning(f"Embedding failed for {profile.filename}: {outcome.message}")
                failed.append(SkippedItem(item_id=profile.filename, reason=outcome.message))
                continue
            embedded = profile.with_embedding(outcome.vector, outcome.is_placeholder)
            imported.append(await self.store.save_profile(embedded))

        report = ImportReport(imported=imported, failed=failed)
        self.logger.info(
            f"Imported {report.success_count} resumes, {report.failure_count} failed"
        )
        audit_log(
            "resumes_imported",
            {
                "imported": [p.id for p in imported],
                "failed": [(f.item_id, f.reason) for f in failed],
            },
            audit_type="IMPORT",
        )
        return report
