"""Gradio UI for the WebsiteBio AI Image Generator."""

import logging

import gradio as gr

from websitebio.core.config import config

from .handlers import (
    begin_generation_ui,
    close_viewer_handler,
    dismiss_error_handler,
    download_image_handler,
    generate_images_handler,
    load_settings_handler,
    prepare_downloads_handler,
    retry_handler,
    save_settings_handler,
    select_image_handler,
    select_recent_prompt,
)
from .models import DEFAULT_QUANTITY, GALLERY_PLACEHOLDER, GENERATE_LABEL, UIState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .error-panel {
        border: 1px solid #ef4444;
        border-radius: 8px;
        padding: 12px;
    }
    .gallery-placeholder {
        text-align: center;
        opacity: 0.6;
        padding: 48px 0;
    }
    """

    app = gr.Blocks(title="WebsiteBio AI Image Generator")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # WebsiteBio AI Image Generator
            ### Describe an image and let the model paint it
            """
        )

        with gr.Row():
            with gr.Column(scale=1):
                prompt_input = gr.Textbox(
                    label="Prompt",
                    placeholder="Describe the image you want to generate...",
                    lines=4,
                )
                recent_prompts = gr.Dropdown(
                    label="Recent Prompts",
                    choices=[],
                    value=None,
                    interactive=True,
                )

                gr.Markdown("### Generation Settings")
                model_dropdown = gr.Dropdown(
                    label="Model",
                    choices=config.available_models,
                    value=config.default_model,
                )
                size_dropdown = gr.Dropdown(
                    label="Size",
                    choices=config.available_sizes,
                    value=config.default_size,
                )
                quantity_slider = gr.Slider(
                    label="Quantity",
                    minimum=1,
                    maximum=config.max_images,
                    step=1,
                    value=DEFAULT_QUANTITY,
                )
                seed_input = gr.Number(
                    label="Seed (optional)",
                    value=None,
                    precision=0,
                    info="Leave empty for a random seed",
                )

                generate_btn = gr.Button(GENERATE_LABEL, variant="primary", size="lg")

            with gr.Column(scale=2):
                status_output = gr.Markdown(value="*Ready to generate images*")
                loading = gr.Markdown(value="⏳ *Creating your images...*", visible=False)

                with gr.Group(visible=False, elem_classes="error-panel") as error_group:
                    error_message = gr.Markdown()
                    with gr.Row():
                        retry_btn = gr.Button("🔄 Retry", variant="secondary")
                        dismiss_btn = gr.Button("Dismiss", variant="secondary")

                placeholder = gr.Markdown(
                    value=GALLERY_PLACEHOLDER, elem_classes="gallery-placeholder"
                )
                gallery = gr.Gallery(
                    label="Generated Images",
                    columns=2,
                    height=520,
                    object_fit="contain",
                    visible=True,
                )
                downloads_list = gr.File(
                    label="Download images", file_count="multiple", visible=False
                )

                with gr.Group(visible=False) as viewer_group:
                    viewer_image = gr.Image(label="Full Size", type="pil", interactive=False)
                    viewer_prompt = gr.Markdown()
                    with gr.Row():
                        download_btn = gr.Button("⬇️ Download", variant="primary")
                        close_btn = gr.Button("Close", variant="secondary")
                    download_file = gr.File(label="Download", visible=False)

        render_targets = [
            generate_btn,
            loading,
            error_group,
            error_message,
            gallery,
            placeholder,
            status_output,
            recent_prompts,
            ui_state,
        ]
        settings_inputs = [model_dropdown, size_dropdown, quantity_slider, seed_input]

        # Generation: disable the trigger first, then run the request
        for trigger in (generate_btn.click, prompt_input.submit):
            trigger(
                fn=begin_generation_ui,
                inputs=[ui_state],
                outputs=render_targets,
                queue=False,
            ).then(
                fn=generate_images_handler,
                inputs=[prompt_input, *settings_inputs, ui_state],
                outputs=render_targets,
            ).then(
                fn=prepare_downloads_handler,
                inputs=[ui_state],
                outputs=[downloads_list, ui_state],
            )

        retry_btn.click(
            fn=begin_generation_ui,
            inputs=[ui_state],
            outputs=render_targets,
            queue=False,
        ).then(
            fn=retry_handler,
            inputs=[*settings_inputs, ui_state],
            outputs=render_targets,
        ).then(
            fn=prepare_downloads_handler,
            inputs=[ui_state],
            outputs=[downloads_list, ui_state],
        )

        dismiss_btn.click(fn=dismiss_error_handler, inputs=[ui_state], outputs=render_targets)

        # Auto-save settings on change
        for component in settings_inputs:
            component.change(
                fn=save_settings_handler,
                inputs=[*settings_inputs, ui_state],
                outputs=[ui_state],
            )

        recent_prompts.change(fn=select_recent_prompt, inputs=[recent_prompts], outputs=[prompt_input])

        # Viewer and downloads
        gallery.select(
            fn=select_image_handler,
            inputs=[ui_state],
            outputs=[viewer_group, viewer_image, viewer_prompt, download_file, ui_state],
        )
        close_btn.click(
            fn=close_viewer_handler,
            inputs=[ui_state],
            outputs=[viewer_group, viewer_image, download_file, ui_state],
        )
        download_btn.click(
            fn=download_image_handler,
            inputs=[ui_state],
            outputs=[download_file, ui_state],
        )

        # Restore saved settings when the page loads
        app.load(
            fn=load_settings_handler,
            inputs=[ui_state],
            outputs=[*settings_inputs, recent_prompts, ui_state],
        )

    return app, custom_css


def main():
    """Main entry point for the application."""
    logger.info("Starting WebsiteBio AI Image Generator...")
    logger.info(
        f"Configuration: endpoint={config.target_url}, "
        f"proxy={'yes' if config.proxy_url else 'no'}, has_api_key={bool(config.api_key)}"
    )

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
