# pdf_processor.py
import asyncio
import functools as _functools
import io
import logging
import time
from typing import List

import pdfplumber
from fastapi import HTTPException

from config import thread_pool
from header import split_lines
from logging_utils import log_event

logger = logging.getLogger("pairings.pdf_processor")


class PDFTextExtractor:
    """Ordered text lines per page; the layout work is left to pdfplumber."""

    @staticmethod
    def page_lines(page) -> List[str]:
        text = page.extract_text() or ""
        return split_lines(text) if text else []

    @staticmethod
    def read_pages(pdf_bytes: bytes) -> List[List[str]]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return [PDFTextExtractor.page_lines(page) for page in pdf.pages]

    @staticmethod
    async def extract(pdf_bytes: bytes) -> List[List[str]]:
        start = time.perf_counter()
        try:
            pages = await asyncio.get_running_loop().run_in_executor(
                thread_pool,
                _functools.partial(PDFTextExtractor.read_pages, pdf_bytes),
            )
        except Exception as e:
            log_event(logger, "pdf_text_failed", level=logging.ERROR, error=str(e))
            raise HTTPException(422, f"PDF text extraction failed: {e}")
        log_event(
            logger,
            "pdf_text_extracted",
            pages=len(pages),
            duration_ms=int((time.perf_counter() - start) * 1000),
        )
        return pages
