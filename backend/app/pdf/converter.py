"""app/pdf/converter.py

External command-line converter tier (Poppler `pdftotext` by default).

The PDF is written to a temp file, the tool is run as `<exe> <file> -` so
text arrives on stdout, and the temp file is removed on every exit path.
A missing executable, non-zero exit or timeout all mean "no output from this
tier", never an exception.
"""



import logging
import os
import shutil
import subprocess
import tempfile

logger = logging.getLogger("app.pdf.converter")

DEFAULT_TIMEOUT_SECONDS = 15.0
_MAX_OUTPUT_BYTES = 15 * 1024 * 1024


class ExternalConverter:
    def __init__(self, executable: str = "pdftotext", timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    @property
    def available(self) -> bool:
        return shutil.which(self.executable) is not None

    def convert(self, pdf_bytes: bytes) -> str:
        if not pdf_bytes:
            return ""

        fd, input_path = tempfile.mkstemp(prefix="dm-", suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(pdf_bytes)

            # run() kills the child itself when the timeout expires
            proc = subprocess.run(
                [self.executable, input_path, "-"],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout_seconds,
                check=False,
            )
            if proc.returncode != 0:
                logger.warning(
                    "pdf.cli.failed",
                    extra={
                        "executable": self.executable,
                        "returncode": proc.returncode,
                        "stderr": proc.stderr[:500].decode("utf-8", errors="replace"),
                    },
                )
                return ""
            return proc.stdout[:_MAX_OUTPUT_BYTES].decode("utf-8", errors="replace")

        except subprocess.TimeoutExpired:
            logger.warning(
                "pdf.cli.timeout",
                extra={"executable": self.executable, "timeout_seconds": self.timeout_seconds},
            )
            return ""
        except OSError as e:
            logger.warning("pdf.cli.unavailable", extra={"executable": self.executable, "error": str(e)})
            return ""
        finally:
            try:
                os.unlink(input_path)
            except FileNotFoundError:
                pass
