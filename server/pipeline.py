# pipeline.py
import logging
import time
from typing import Iterable, List, Sequence

from assembler import PairingAssembler
from context import DocumentContext
from errors import PairingError
from header import parse_document_header, split_lines
from logging_utils import document_scope, log_event
from models import ParseFailure, ParseResult, Pairing
from pdf_processor import PDFTextExtractor
from segmenter import BlockSegmenter
from tokenizer import BlockTokenizer
from validator import PairingValidator

logger = logging.getLogger("pairings.pipeline")


class PairingPipeline:
    """Title check -> segmenter -> tokenizer -> assembler -> validator, one document at a time."""

    def __init__(self) -> None:
        self.segmenter = BlockSegmenter()

    def parse_lines(self, lines: Sequence[str], document_name: str = "document") -> ParseResult:
        with document_scope(document_name):
            return self._parse(list(lines), DocumentContext(name=document_name))

    def _parse(self, lines: List[str], context: DocumentContext) -> ParseResult:
        context.start_timer("total")

        try:
            context.header = parse_document_header(lines[0] if lines else "")

            context.start_timer("segment")
            blocks = self.segmenter.segment(lines)
            context.end_timer("segment")

            context.start_timer("tokenize")
            tokenizer = BlockTokenizer(context)
            assembler = PairingAssembler(context)
            pairings: List[Pairing] = [assembler.assemble(tokenizer.tokenize(block)) for block in blocks]
            context.end_timer("tokenize")

            context.start_timer("validate")
            PairingValidator().validate(pairings)
            context.end_timer("validate")
        except PairingError as e:
            context.end_timer("total")
            log_event(
                logger,
                "document_rejected",
                pairing_id=e.pairing_id,
                stage=e.stage,
                field=e.field,
            )
            return ParseResult(
                document=context.name,
                recoveries=len(context.recoveries),
                processing_time=dict(context.timings),
                error=ParseFailure(
                    document=context.name,
                    pairing_id=e.pairing_id,
                    field=e.field,
                    expected=e.expected,
                    found=e.found,
                    message=e.describe(),
                ),
            )

        context.end_timer("total")
        header = context.header
        log_event(
            logger,
            "document_parsed",
            month=header.month_code,
            year=header.year,
            codeshare=header.codeshare,
            pairings=len(pairings),
            recoveries=len(context.recoveries),
            duration_ms=int(context.timings["total"] * 1000),
        )
        return ParseResult(
            document=context.name,
            month_code=header.month_code,
            year=header.year,
            codeshare=header.codeshare,
            pairings=pairings,
            recoveries=len(context.recoveries),
            processing_time=dict(context.timings),
        )

    def parse_text(self, text: str, document_name: str = "document") -> ParseResult:
        return self.parse_lines(split_lines(text), document_name)

    def parse_pages(self, pages: Iterable[Sequence[str]], document_name: str = "document") -> ParseResult:
        return self.parse_lines([line for page in pages for line in page], document_name)

    async def parse_pdf(self, pdf_bytes: bytes, document_name: str = "document.pdf") -> ParseResult:
        start = time.perf_counter()
        pages = await PDFTextExtractor.extract(pdf_bytes)
        elapsed = time.perf_counter() - start
        result = self.parse_pages(pages, document_name)
        result.processing_time["pdf_text"] = elapsed
        return result
