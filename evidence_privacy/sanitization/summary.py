from evidence_privacy.sanitization.models import BatchManifest, ProcessingSummary


def summarize(manifest: BatchManifest) -> ProcessingSummary:
    """Reduce a manifest to aggregate counts. Safe on an empty manifest."""
    total_original = sum(result.original_size for result in manifest)
    total_processed = sum(result.processed_size for result in manifest)
    size_reduction = (
        (total_original - total_processed) / total_original * 100
        if total_original > 0
        else 0.0
    )
    return ProcessingSummary(
        total_files=len(manifest),
        metadata_stripped=sum(1 for result in manifest if result.metadata_stripped),
        noise_added=sum(1 for result in manifest if result.noise_added),
        size_reduction=size_reduction,
        processing_success=sum(1 for result in manifest if not result.failed),
    )
