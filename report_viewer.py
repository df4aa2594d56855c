import os
import tempfile

import streamlit as st

from core.params import default_version, resolve_schema
from core.settings import SCHEMAS
from managers import FileManager
from services import SummaryService
from validators import ValidationPipeline, ValidationRunError

# ==============================================================================
# PAGE CONFIGURATION
# ==============================================================================
st.set_page_config(
    page_title="XML Validation Report",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
.section-header {
    border-bottom: 2px solid rgba(0, 153, 153, 0.3);
    padding-bottom: 10px;
    margin-top: 20px;
    margin-bottom: 20px;
    font-weight: 700;
    text-transform: uppercase;
}
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)

# ==============================================================================
# SIDEBAR
# ==============================================================================
with st.sidebar:
    st.markdown("### Configuration")
    schema_name = st.selectbox("Schema", sorted(SCHEMAS), index=sorted(SCHEMAS).index("tei"))
    version = st.text_input("Version", value=default_version(schema_name))
    schema_dir = st.text_input("Schema directory", value="") or None

    st.divider()
    st.markdown("### About")
    st.info("Runs RELAX NG (jing) and, for schemas that provide one, Schematron validation and merges all issues into one report.")

# ==============================================================================
# MAIN CORE
# ==============================================================================
st.title("XML Validation Report")

st.markdown("<div class='section-header'>File Selection</div>", unsafe_allow_html=True)
uploaded_files = st.file_uploader("Choose XML files to validate", type="xml", accept_multiple_files=True)

if uploaded_files:
    if st.button("Start Validation", use_container_width=True):
        try:
            schema = resolve_schema(schema_name, version, schema_dir)
        except ValueError as e:
            st.error(str(e))
            st.stop()

        with tempfile.TemporaryDirectory() as work_dir:
            # Keep the uploaded names so the report refers to them
            paths = []
            for uploaded_file in uploaded_files:
                path = os.path.join(work_dir, uploaded_file.name)
                with open(path, "wb") as f:
                    f.write(uploaded_file.getvalue())
                paths.append(path)

            pipeline = ValidationPipeline(schema, file_manager=FileManager({}))
            with st.spinner(f"Validating {len(paths)} file(s) against {schema.title}..."):
                try:
                    result = pipeline.validate_files(paths)
                except ValidationRunError as e:
                    st.error(f"Validation could not run: {e}")
                    st.stop()

            stats = result.statistics
            st.markdown("<div class='section-header'>Validation Report Summary</div>", unsafe_allow_html=True)
            col1, col2, col3, col4 = st.columns(4)
            col1.metric("Total Files", stats.total_files)
            col2.metric("Files with issues", stats.files_with_issues)
            col3.metric("Errors", stats.num_errors, delta_color="inverse" if stats.num_errors else "normal")
            col4.metric("Warnings", stats.num_warnings)

            for failed_file, message in result.failures.items():
                st.error(f"{os.path.basename(failed_file)}: {message}")

            if result.issues:
                st.markdown("<div class='section-header'>Issues</div>", unsafe_allow_html=True)
                st.caption(f"{stats.unique_issues} unique out of {stats.total_issues}")
                table = SummaryService({}).format_table(result.summary_rows())
                st.markdown(table, unsafe_allow_html=True)
            else:
                st.success("All files are valid")
else:
    st.info("Please upload one or more XML files to begin validation.")
