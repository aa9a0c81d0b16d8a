from flask import Flask, request, jsonify, render_template, send_file
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge
import io, logging

from .config import ImageOptions, PdfOptions, ServiceConfig, setup_logging
from .errors import ConversionError, ValidationError
from .image_layout import render_image
from .pdf_layout import render_document
from .rasterize import rasterize

config = ServiceConfig.from_env()
setup_logging(config.log_level)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes
CORS(app, resources={r"/*": {"origins": config.cors_origins}}, methods=["GET", "POST", "OPTIONS"],
     allow_headers=["Content-Type"], expose_headers=["Content-Type", "Content-Disposition"])

JPG_FILENAME = "math-formulas.jpg"
PDF_FILENAME = "math-formulas.pdf"

TEXT_EXAMPLE = "The quadratic formula is \\\\[ x = \\\\frac{-b \\\\pm \\\\sqrt{b^2 - 4ac}}{2a} \\\\]"

# ============ Helpers ============

def _error(err: ConversionError):
    return jsonify(err.to_dict()), err.status

def _read_text_payload():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        payload = {}
    text = payload.get("text")
    if not text:
        raise ValidationError("No text provided")
    return str(text), payload.get("options") or {}

def _method_not_allowed(message, example=None):
    body = {"error": message}
    if example is not None:
        body["example"] = example
    return jsonify(body), 405

@app.errorhandler(RequestEntityTooLarge)
def upload_too_large(e):
    logger.warning("Rejected upload larger than %s bytes", app.config.get("MAX_CONTENT_LENGTH"))
    return jsonify({"error": "File too large"}), 413

# ============ Pages ============

@app.get('/')
def index():
    return render_template("index.html")

@app.get('/text-to-math')
def text_to_math():
    return render_template("text_to_math.html")

@app.get('/health')
def health():
    return jsonify({"status": "ok"})

# ============ PDF -> images ============

@app.post('/api/convert-pdf-to-jpg')
@app.post('/api/convert')
def convert_pdf_to_images():
    f = request.files.get('pdf')
    if f is None:
        return _error(ValidationError("No PDF file provided"))
    if f.mimetype != 'application/pdf':
        logger.warning("Rejected upload %r with type %s", f.filename, f.mimetype)
        return _error(ValidationError("File must be a PDF"))

    try:
        images = rasterize(f.read(), scale=config.pdf_render_scale)
        return jsonify({"success": True, "images": images, "pageCount": len(images)})
    except ConversionError as e:
        return _error(e)
    except Exception:
        logger.exception("PDF conversion error")
        return jsonify({"error": "Failed to convert PDF to JPG"}), 500

@app.get('/api/convert-pdf-to-jpg')
@app.get('/api/convert')
def convert_pdf_to_images_usage():
    return _method_not_allowed("Method not allowed. Use POST to upload a PDF.")

# ============ Text -> JPEG ============

@app.post('/api/text-to-jpg')
def text_to_jpg():
    try:
        text, options = _read_text_payload()
    except ValidationError as e:
        return _error(e)
    try:
        data = render_image(text, ImageOptions.from_request(options))
    except ConversionError as e:
        logger.exception("JPG generation error")
        return _error(e)
    except Exception as e:
        logger.exception("JPG generation error")
        return jsonify({"error": "Failed to generate JPG", "details": str(e)}), 500
    return send_file(io.BytesIO(data), mimetype="image/jpeg", as_attachment=True, download_name=JPG_FILENAME)

@app.get('/api/text-to-jpg')
def text_to_jpg_usage():
    return _method_not_allowed(
        'Method not allowed. Use POST with JSON body containing "text" field.',
        {"text": TEXT_EXAMPLE, "options": {"width": 800, "height": 600, "fontSize": 16, "padding": 40}},
    )

# ============ Text -> PDF ============

@app.post('/api/text-to-latex-pdf')
def text_to_pdf():
    try:
        text, options = _read_text_payload()
    except ValidationError as e:
        return _error(e)
    try:
        data = render_document(text, PdfOptions.from_request(options))
    except ConversionError as e:
        logger.exception("PDF generation error")
        return _error(e)
    except Exception as e:
        logger.exception("PDF generation error")
        return jsonify({"error": "Failed to generate PDF", "details": str(e)}), 500
    return send_file(io.BytesIO(data), mimetype="application/pdf", as_attachment=True, download_name=PDF_FILENAME)

@app.get('/api/text-to-latex-pdf')
def text_to_pdf_usage():
    return _method_not_allowed(
        'Method not allowed. Use POST with JSON body containing "text" field.',
        {"text": TEXT_EXAMPLE + "\\n\\nFor inline math: \\\\( E = mc^2 \\\\)",
         "options": {"fontSize": 12, "margin": 50}},
    )

def main():
    app.run(host=config.host, port=config.port)

if __name__ == '__main__':
    main()
