"""
prompts.py
==========
Fixed prompt text and request defaults for the dermatology analysis call.
"""

DEFAULT_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL    = "google/gemini-2.5-flash"
TEMPERATURE      = 0.7

SYSTEM_PROMPT = """You are an expert dermatologist AI assistant. Analyze skin condition images and provide:
1. The most likely skin disease/condition name
2. Possible causes (be specific and medically accurate)
3. A comprehensive summary including symptoms, severity assessment, and general recommendations

Be professional, accurate, and always include a disclaimer that this is not a substitute for professional medical advice.

Format your response as JSON with these exact keys:
{
  "disease": "Name of the condition",
  "causes": "Detailed explanation of possible causes",
  "summary": "Comprehensive summary with symptoms and recommendations"
}"""

USER_INSTRUCTION = (
    "Please analyze this skin condition image and provide a detailed assessment."
)


def build_messages(image: str) -> list:
    """Return the system + two-part multimodal user message for *image*."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": USER_INSTRUCTION},
                {"type": "image_url", "image_url": {"url": image}},
            ],
        },
    ]
