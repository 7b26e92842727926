#!/usr/bin/env python3
"""
CV Renderer - JSON payload in, PDF out.

Usage:
    python -m scripts.render_cv cv.json                          # writes <Name>_Resume_Global.pdf
    python -m scripts.render_cv cv.json -o out.pdf --language tr --style turkey
    python -m scripts.render_cv letter.json --cover-letter -o letter.pdf
    python -m scripts.render_cv --show-config
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import Settings  # noqa: E402
from cv_core.exceptions import CvRenderError  # noqa: E402
from cv_core.models import TemplateVariant  # noqa: E402
from cv_core.pdf_engine import CoverLetterComposer, DocumentComposer, FontProvider, suggest_filename  # noqa: E402
from cv_core.schemas import CoverLetterPayload, CvPayload  # noqa: E402

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a CV or cover letter JSON payload to PDF")
    parser.add_argument("input", type=str, nargs="?", help="JSON payload path")
    parser.add_argument("-o", "--output", type=str, help="Output PDF path")
    parser.add_argument("--language", type=str, help="Document language (en | tr)")
    parser.add_argument("--style", type=str, help="Regional style (global | turkey)")
    parser.add_argument("--cover-letter", action="store_true", help="Input is a cover letter payload")
    parser.add_argument("--show-config", action="store_true", help="Print the effective configuration and exit")
    return parser


def render_cv(payload: dict, args, settings: Settings, provider: FontProvider) -> tuple:
    cv = CvPayload.model_validate(payload)
    # Command line beats payload beats settings; the resolver normalizes aliases
    variant = TemplateVariant(
        language=args.language or cv.language or settings.default_language,
        style=args.style or cv.version or settings.default_style,
    )
    document = cv.to_document()
    pdf = DocumentComposer(font_provider=provider).render(document, variant)
    return pdf, suggest_filename(document.personal_info, variant)


def render_cover_letter(payload: dict, args, provider: FontProvider) -> tuple:
    letter = CoverLetterPayload.model_validate(payload)
    if args.language:
        letter = letter.model_copy(update={"language": args.language})
    pdf = CoverLetterComposer(font_provider=provider).render(letter.to_model())
    return pdf, "Cover_Letter.pdf"


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings()

    if args.show_config:
        settings.print_config()
        return 0
    if args.input is None:
        parser.error("the following arguments are required: input")

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        payload = json.loads(Path(args.input).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1

    provider = FontProvider(additional_paths=settings.font_dirs)

    try:
        if args.cover_letter:
            pdf, filename = render_cover_letter(payload, args, provider)
        else:
            pdf, filename = render_cv(payload, args, settings, provider)
    except ValidationError as e:
        logger.error(f"Invalid payload:\n{e}")
        return 1
    except CvRenderError as e:
        logger.error(f"Rendering failed: {e}")
        return 1

    output = Path(args.output) if args.output else settings.get_output_dir() / filename
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pdf)
    print(f"PDF written: {output} ({len(pdf)} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
