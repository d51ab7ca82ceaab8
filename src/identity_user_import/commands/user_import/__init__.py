"""Command for importing user data into the identity service."""

import structlog

from identity_user_import.accounts import (
    MAX_BATCH_SIZE,
    BatchImporter,
    HashAlgorithmConfig,
    ImportOutcome,
)
from identity_user_import.data import InputData, InputRecord
from identity_user_import.identity import IdentityService

from ._models import ImportFailure, ImportOptions, ImportResults

logger = structlog.get_logger(__name__)


def _failures(
    batch: list[InputRecord],
    outcome: ImportOutcome,
) -> list[ImportFailure]:
    failures = []
    for e in outcome.errors:
        if 0 <= e.index < len(batch):
            source = batch[e.index]
            failures.append(
                ImportFailure(e.message, source.location, source.row, source.record.uid),
            )
        else:
            logger.warning("identity service reported unknown index", index=e.index)
            failures.append(ImportFailure(e.message))

    return failures


def run(options: ImportOptions) -> ImportResults:
    """Import users into the identity service.

    Every input file is checked before the first batch is sent. Batches are
    imported one after the other, failed users are reported and not retried.

    :raises InputDataError: when any input file can't be read or isn't valid.
    """
    if not 1 <= options.batch_size <= MAX_BATCH_SIZE:
        size = f"Batch size must be between 1 and {MAX_BATCH_SIZE}"
        raise ValueError(size)

    hash_config = (
        HashAlgorithmConfig.from_options(
            options.hash_algorithm,
            **options.hash_parameters,
        )
        if options.hash_algorithm
        else None
    )

    data = InputData(options)
    data.raise_for_errors()

    import_results = ImportResults()
    with IdentityService(options).connect() as client:
        importer = BatchImporter(client, options.project_id)
        for batch in data.batch(options.batch_size):
            logger.info(
                "starting batch",
                batch=import_results.batches + 1,
                size=len(batch),
            )
            outcome = importer.import_users([b.record for b in batch], hash_config)

            import_results.batches += 1
            import_results.success_count += outcome.success_count
            import_results.failure_count += outcome.failure_count
            import_results.failures.extend(_failures(batch, outcome))

    return import_results


__all__ = ["ImportFailure", "ImportOptions", "ImportResults", "run"]
