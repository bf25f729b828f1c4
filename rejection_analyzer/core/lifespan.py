from contextlib import asynccontextmanager
import logging

from rejection_analyzer.core.analysis_config import get_analysis_config
from rejection_analyzer.taxonomy import get_default_document_taxonomy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    config = get_analysis_config()
    taxonomy = get_default_document_taxonomy()
    logger.info(
        "analysis_tables_loaded config_sections=%s document_categories=%s",
        len(config),
        len(taxonomy.document_categories),
    )
    yield
