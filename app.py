"""
Streamlit frontend for the Image Animation Studio.

This is the main entry point for the application. It collects images, a motion
prompt and an aspect ratio, then animates each image with Veo, one at a time,
showing results as they arrive.

Environment Variables:
- GEMINI_API_KEY or GOOGLE_GENAI_API_KEY: Default API key (can be set in the sidebar)
- VEO_MODEL: (Optional) Veo model to use (default: veo-2.0-generate-001)
- VEO_POLL_INTERVAL_SECONDS: (Optional) Seconds between status polls (default: 10)
- VEO_MAX_WAIT_SECONDS: (Optional) Give up on a job after this many seconds (default: 900, 0 = never)
- VEO_PERSON_GENERATION: (Optional) Veo person generation policy (default: allow_adult)
- LOG_LEVEL: (Optional) Logging level (default: INFO)
"""

import hashlib

import streamlit as st
from dotenv import load_dotenv
from streamlit.runtime.scriptrunner import add_script_run_ctx

# Import all modular components
from modules import (
    ASPECT_RATIOS,
    DEFAULT_ASPECT_RATIO,
    PROMPT_PLACEHOLDER,
    get_api_key,
    image_file_from_upload,
    run_batch,
    validate_batch_inputs,
    video_file_name,
)

# Load environment variables from .env file
load_dotenv()

# ---------- Streamlit Page Configuration ----------
st.set_page_config(
    page_title="Image Animation Studio",
    page_icon="🎬",
    layout="wide"
)

# ---------- Session State ----------
if "api_key" not in st.session_state:
    st.session_state["api_key"] = get_api_key()
st.session_state.setdefault("results", ())
st.session_state.setdefault("upload_signature", None)
st.session_state.setdefault("summary", "")


def _upload_signature(files) -> str:
    digest = hashlib.sha1()
    for f in files:
        digest.update(f.name.encode("utf-8"))
        digest.update(str(f.size).encode("ascii"))
    return digest.hexdigest()


def _render_results(results, container, with_downloads: bool) -> None:
    """Draw the result grid; download buttons only on the final render."""
    with container.container():
        st.markdown("### 🎞️ Generated Videos")
        cols = st.columns(2)
        for index, result in enumerate(results):
            with cols[index % 2]:
                if result.ok:
                    st.video(result.video, format="video/mp4", autoplay=True, loop=True)
                    st.caption(result.file_name)
                    if with_downloads:
                        st.download_button(
                            "⬇️ Download Video",
                            data=result.video,
                            file_name=video_file_name(result.file_name),
                            mime="video/mp4",
                            key=f"download_{index}",
                            use_container_width=True,
                        )
                else:
                    st.image(result.original_image, width=96)
                    st.error(f"**Animation Failed** ({result.file_name})")
                    st.caption(result.error)


# ---------- Main UI ----------
st.title("🎬 Image Animation Studio")
st.markdown("_Bring your images to life with Veo_")

# ---------- Sidebar: API Key ----------
with st.sidebar:
    st.markdown("**API Key & Settings**")
    sidebar_key = st.text_input(
        "Gemini API Key",
        type="password",
        value=st.session_state["api_key"],
        help="Your API key from Google AI Studio (ai.google.dev). Kept only in this session."
    )
    if sidebar_key != st.session_state["api_key"]:
        st.session_state["api_key"] = sidebar_key
    if st.session_state["api_key"]:
        st.caption("✅ API key set")
    else:
        st.caption("⚠️ No API key. Add one here or on the Settings page.")

col_controls, col_output = st.columns(2)

with col_controls:
    # ---------- Section 1: Upload ----------
    st.header("1️⃣ Upload Image(s)")
    uploaded = st.file_uploader(
        "Choose image files",
        type=["png", "jpg", "jpeg", "webp", "gif", "bmp"],
        accept_multiple_files=True,
        help="Each image is animated separately"
    )
    uploaded = uploaded or []

    signature = _upload_signature(uploaded)
    if signature != st.session_state["upload_signature"]:
        st.session_state["upload_signature"] = signature
        st.session_state["results"] = ()
        st.session_state["summary"] = ""

    if uploaded:
        thumbs = st.columns(min(len(uploaded), 4))
        for index, f in enumerate(uploaded):
            with thumbs[index % len(thumbs)]:
                st.image(f, caption=f.name)

    # ---------- Section 2: Prompt ----------
    st.header("2️⃣ Describe Animation")
    prompt = st.text_area(
        "Prompt",
        placeholder=PROMPT_PLACEHOLDER,
        height=120,
        label_visibility="collapsed",
    )

    # ---------- Section 3: Aspect Ratio ----------
    st.header("3️⃣ Aspect Ratio")
    aspect_ratio = st.radio(
        "Aspect ratio",
        ASPECT_RATIOS,
        index=ASPECT_RATIOS.index(DEFAULT_ASPECT_RATIO),
        horizontal=True,
        label_visibility="collapsed",
    )

    label = f"🚀 Animate {len(uploaded)} Image(s)" if uploaded else "🚀 Animate Image(s)"
    generate = st.button(label, type="primary", use_container_width=True, disabled=not uploaded)

with col_output:
    status_placeholder = st.empty()
    results_placeholder = st.empty()

# ---------- Generation Logic ----------
if generate:
    images = [image_file_from_upload(f) for f in uploaded]
    api_key = st.session_state["api_key"]
    problem = validate_batch_inputs(api_key, images, prompt)
    if problem:
        status_placeholder.error(problem)
    else:
        st.session_state["results"] = ()
        with status_placeholder.status("Processing your images...", expanded=True) as status:
            progress_line = st.empty()

            def on_update(results):
                st.session_state["results"] = results
                _render_results(results, results_placeholder, with_downloads=False)

            results = run_batch(
                api_key,
                images,
                prompt,
                aspect_ratio,
                on_progress=progress_line.info,
                on_update=on_update,
                attach_thread=add_script_run_ctx,
            )
            failed = sum(1 for r in results if not r.ok)
            if failed:
                summary = f"⚠️ Done with {failed} failure(s)."
                status.update(label=summary, state="error")
            else:
                summary = "✅ Complete! Your videos are ready."
                status.update(label=summary, state="complete")
            st.session_state["summary"] = summary
        st.rerun()

with col_output:
    if st.session_state["results"]:
        if st.session_state["summary"]:
            status_placeholder.caption(st.session_state["summary"])
        _render_results(st.session_state["results"], results_placeholder, with_downloads=True)
    elif not generate:
        results_placeholder.info("💡 Your generated videos will appear here")

st.caption("Built with Streamlit + Google Veo. Set your API key in the sidebar to get started.")
