"""
viewer — Streamlit uploader/viewer for the DermaDict proxy.

Pipeline:
  image_loader  — decode: uploaded file → EncodedImage (or ImageValidationError)
  session       — store: idle → has-image → analyzing → has-result
  proxy_client  — invoke POST /api/analyze-skin
  app           — render (run with `streamlit run viewer/app.py`)
"""
