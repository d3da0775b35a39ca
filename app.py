import gradio as gr

from gpkg_csv_converter.handlers import convert_upload_handler, reset_handler
from gpkg_csv_converter.settings import configure_logging, get_settings

settings = get_settings()
configure_logging(settings.log_level)

# --- UI Definition ---
with gr.Blocks(title="GPKG to CSV Converter") as demo:
    gr.Markdown("# GPKG to CSV Converter")
    gr.Markdown("Convert GeoPackage files to CSV format for QField compatibility.")

    with gr.Row():
        # Left Panel: Upload
        with gr.Column(scale=1):
            gr.Markdown("### 1. Upload GPKG File")
            file_input = gr.File(label="GeoPackage (.gpkg)", file_types=[".gpkg"])
            gr.Markdown(f"Supports .gpkg files up to {settings.max_upload_mb:g}MB")
            status_msg = gr.Textbox(label="Status", interactive=False)
            reset_btn = gr.Button("Reset & Convert Another")

        # Right Panel: Result
        with gr.Column(scale=1):
            gr.Markdown("### 2. Download CSV")
            download_output = gr.File(label="Download CSV")
            gr.Markdown(f"### Preview (First {settings.preview_lines} rows)")
            preview_box = gr.Textbox(label="Preview", lines=settings.preview_lines, interactive=False)

    with gr.Row():
        with gr.Column():
            gr.Markdown("**Supported Formats**: .gpkg (GeoPackage) files containing vector data, tables, and spatial information.")
        with gr.Column():
            gr.Markdown("**CSV Output**: every user table in one CSV, with a leading `table` column and all attributes preserved.")
        with gr.Column():
            gr.Markdown("**QField Compatible**: output files can be imported directly into QField.")

    file_input.upload(
        fn=convert_upload_handler,
        inputs=[file_input],
        outputs=[download_output, status_msg, preview_box],
    )

    reset_btn.click(
        fn=reset_handler,
        inputs=[],
        outputs=[file_input, download_output, status_msg, preview_box],
    )

if __name__ == "__main__":
    demo.launch(server_name=settings.server_name, server_port=settings.server_port)
