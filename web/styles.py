# web/styles.py
"""
Custom CSS Styles for the Streamlit Skin Analysis Page
======================================================
Teal/blue theme, confidence meter and comparison cards.
"""

LEVEL_COLORS = {
    "low": "#f59e0b",
    "medium": "#6366f1",
    "high": "#10b981",
}


def get_custom_css() -> str:
    """Return custom CSS for the Streamlit app."""
    return """
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

    .stApp {
        font-family: 'Inter', sans-serif;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}

    /* ===== Header ===== */
    .main-header {
        background: linear-gradient(135deg, #2a7f8c 0%, #0e7490 100%);
        padding: 2rem;
        border-radius: 12px;
        margin-bottom: 2rem;
        color: white;
        text-align: center;
    }

    .main-header h1 {
        font-size: 2.5rem;
        font-weight: 700;
        margin: 0;
    }

    .main-header p {
        font-size: 1.1rem;
        opacity: 0.9;
        margin-top: 0.5rem;
    }

    /* ===== Result ===== */
    .result-card {
        background: linear-gradient(135deg, #f0fdfa 0%, #ecfeff 100%);
        border-left: 4px solid #14b8a6;
        border-radius: 12px;
        padding: 1.5rem;
        margin-bottom: 1rem;
    }

    .result-card h4 {
        margin: 0 0 0.25rem 0;
        color: #374151;
    }

    /* ===== Confidence Meter ===== */
    .confidence-meter {
        height: 14px;
        background: #e5e7eb;
        border-radius: 7px;
        overflow: hidden;
        margin: 0.5rem 0;
    }

    .confidence-fill {
        height: 100%;
        border-radius: 7px;
        transition: width 0.4s;
    }

    /* ===== Comparison Grid ===== */
    .model-card {
        background: white;
        border-radius: 10px;
        padding: 1rem;
        border: 1px solid #e5e7eb;
        box-shadow: 0 2px 4px rgba(0, 0, 0, 0.05);
        text-align: center;
    }

    .model-card h5 {
        margin: 0;
        color: #0891b2;
    }

    /* ===== Footer ===== */
    .footer {
        background: #f1f5f9;
        padding: 1.5rem;
        border-radius: 12px;
        margin-top: 3rem;
        text-align: center;
        color: #64748b;
        font-size: 0.875rem;
    }

    .footer-warning {
        color: #f59e0b;
        font-weight: 600;
    }
    </style>
    """


def render_header() -> str:
    """Return HTML for the main header."""
    return """
    <div class="main-header">
        <h1>Skin-In</h1>
        <p>Upload a photo of your skin and get an instant AI-assisted analysis</p>
    </div>
    """


def render_footer() -> str:
    """Return HTML for the footer disclaimer."""
    return """
    <div class="footer">
        <p class="footer-warning">IMPORTANT DISCLAIMER</p>
        <p>This tool is for <strong>informational purposes only</strong> and is not a medical diagnosis.</p>
        <p>Always consult a dermatologist for persistent or worsening skin conditions.</p>
    </div>
    """


def render_confidence_meter(percent: int, level: str) -> str:
    """Render the confidence bar, colored by level."""
    color = LEVEL_COLORS.get(level, "#0891b2")
    return f"""
    <div class="confidence-meter">
        <div class="confidence-fill" style="width: {percent}%; background: {color};"></div>
    </div>
    <div style="text-align: right; font-weight: 600;">{percent}%</div>
    """


def render_model_card(model_id: str, label: str, percent: int, level: str) -> str:
    """Render one comparison card."""
    return f"""
    <div class="model-card">
        <h5>{model_id}</h5>
        <p>{label}</p>
        {render_confidence_meter(percent, level)}
        <small>{percent}% confidence</small>
    </div>
    """
