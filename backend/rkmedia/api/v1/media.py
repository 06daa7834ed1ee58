"""
RK Media Server v1.0.0 - Media API
Library management, directory browsing, scanning and uploads
"""

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
from typing import List, Optional

from ...config import settings
from ...schemas.library import LibraryCreate, LibraryResponse
from ...schemas.media import DirectoryNodeResponse, IndexResult, ScannableFileResponse
from ...services import LibraryRegistry, MediaIndexer, UploadedFile, UploadIngestor
from ...services.walker import list_scannable_files, list_subdirectories
from ..deps import get_base_dir, get_current_identity, get_indexer, get_ingestor, get_registry

router = APIRouter(prefix="/media", dependencies=[Depends(get_current_identity)])


def _require_library_id(library_id: Optional[int]) -> int:
    if not library_id:
        raise HTTPException(status_code=400, detail="libraryId query parameter is required")
    return library_id


async def _read_limited(upload: UploadFile, limit: int) -> bytes:
    """Read an upload in chunks, refusing it once it passes limit"""
    try:
        if upload.size is not None and upload.size > limit:
            raise HTTPException(status_code=413, detail=f"File too large: {upload.filename}")
        chunks = []
        total = 0
        while True:
            chunk = await upload.read(1 << 20)
            if not chunk:
                break
            total += len(chunk)
            if total > limit:
                raise HTTPException(status_code=413, detail=f"File too large: {upload.filename}")
            chunks.append(chunk)
        return b"".join(chunks)
    finally:
        await upload.close()


@router.post("/libraries", status_code=201)
def add_library(body: LibraryCreate, registry: LibraryRegistry = Depends(get_registry)):
    """Register a directory as a media library"""
    library = registry.create(body.name, body.path)
    return {
        "message": "Media library added successfully",
        "library": LibraryResponse.model_validate(library),
    }


@router.get("/libraries")
def get_all_libraries(registry: LibraryRegistry = Depends(get_registry)):
    """List all libraries with their media items"""
    libraries = registry.list_all()
    return {"libraries": [LibraryResponse.model_validate(lib) for lib in libraries]}


@router.delete("/libraries/{library_id}", status_code=204)
def delete_library(library_id: int, registry: LibraryRegistry = Depends(get_registry)):
    """Delete a library and its media items (files on disk are kept)"""
    registry.delete(library_id)
    return Response(status_code=204)


@router.get("/directories")
def get_directories(
    path: str = Query(default="", description="Absolute path or path relative to the media directory"),
    base_dir: str = Depends(get_base_dir),
):
    """Subdirectories of a path, for choosing a library root"""
    directories = list_subdirectories(base_dir, path)
    return {"directories": [DirectoryNodeResponse.model_validate(d) for d in directories]}


@router.get("/movies")
def get_movies(
    path: str = Query(default="", description="Absolute path or path relative to the media directory"),
    base_dir: str = Depends(get_base_dir),
):
    """Supported media files directly inside a path"""
    movies = list_scannable_files(base_dir, path)
    return {"movies": [ScannableFileResponse.model_validate(m) for m in movies]}


@router.post("/scan", response_model=IndexResult)
def scan_library(
    library_id: Optional[int] = Query(None, alias="libraryId"),
    indexer: MediaIndexer = Depends(get_indexer),
):
    """Scan a library's directory tree for new media files"""
    report = indexer.scan(_require_library_id(library_id))
    return IndexResult(
        message="Media library scanned successfully.",
        library_id=report.library_id,
        added=report.added,
        skipped=report.skipped,
        failures=[{"path": f.path, "reason": f.reason} for f in report.failures],
    )


@router.post("/upload", response_model=IndexResult)
async def upload_directory(
    library_id: Optional[int] = Query(None, alias="libraryId"),
    files: Optional[List[UploadFile]] = File(None),
    ingestor: UploadIngestor = Depends(get_ingestor),
):
    """
    Upload files (e.g. a whole directory picked in the browser)

    Each file name may carry a path relative to the media directory.
    """
    library_id = _require_library_id(library_id)
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded.")
    if len(files) > settings.UPLOAD_MAX_FILES:
        raise HTTPException(
            status_code=413, detail=f"Too many files (max {settings.UPLOAD_MAX_FILES})"
        )

    uploads = []
    for upload in files:
        data = await _read_limited(upload, settings.UPLOAD_MAX_FILE_SIZE)
        uploads.append(UploadedFile(name=upload.filename or "", data=data, size=len(data)))

    report = await run_in_threadpool(ingestor.ingest, uploads, library_id)
    return IndexResult(
        message="Directory uploaded and processed successfully.",
        library_id=report.library_id,
        added=report.added,
        skipped=report.skipped,
        failures=[{"path": f.path, "reason": f.reason} for f in report.failures],
    )
