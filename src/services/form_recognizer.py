from loguru import logger
from azure.ai.documentintelligence import DocumentIntelligenceClient
from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import AzureError
from .analysis_types import AnalysisResult
from .azure_adapter import document_from_azure
from .extraction import extract_analysis
from .field_profiles import profile_for_model
from ..core.config import settings
from ..core.exceptions import AnalysisServiceError, EmptyDocumentError, ServiceNotConfiguredError


def create_client() -> DocumentIntelligenceClient:
    if not settings.is_azure_configured:
        raise ServiceNotConfiguredError(
            "Azure Document Intelligence is not configured. "
            "Set AZ_DI_ENDPOINT and AZ_DI_API_KEY to enable document analysis."
        )

    return DocumentIntelligenceClient(
        endpoint=settings.az_di_endpoint,
        credential=AzureKeyCredential(settings.az_di_api_key)
    )


def analyze_document(
    file_bytes: bytes,
    client: DocumentIntelligenceClient | None = None,
    model_id: str | None = None,
) -> AnalysisResult:
    """
    Analyze a document with Azure Document Intelligence and extract its fields.

    Args:
        file_bytes: Raw PDF or image bytes
        client: Client to use (default: built from settings)
        model_id: Prebuilt model id (default: AZ_DI_MODEL_ID)

    Returns:
        AnalysisResult with every slot the document yielded

    Raises:
        EmptyDocumentError: file_bytes is empty
        ServiceNotConfiguredError: no client given and Azure is not configured
        AnalysisServiceError: the Azure call failed
    """
    if not file_bytes:
        raise EmptyDocumentError("File stream is empty.")

    model_id = model_id or settings.az_di_model_id
    client = client or create_client()

    logger.info(
        "Analyzing document with Azure Document Intelligence",
        model_id=model_id,
        size_bytes=len(file_bytes)
    )

    try:
        poller = client.begin_analyze_document(
            model_id,
            body=file_bytes,
            content_type="application/octet-stream"
        )
        result = poller.result()
    except AzureError as e:
        logger.error(f"Azure DI analysis failed: {str(e)}")
        raise AnalysisServiceError(
            f"Document analysis failed: {str(e)}",
            details={"model_id": model_id}
        ) from e

    document = document_from_azure(result)
    return extract_analysis(
        document,
        profile=profile_for_model(model_id),
        dayfirst=settings.date_dayfirst
    )
