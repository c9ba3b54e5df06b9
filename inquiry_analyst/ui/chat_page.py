"""NiceGUI analysis interface with SSE streaming support."""

import os
from dataclasses import dataclass

import httpx
from nicegui import events, ui

from inquiry_analyst.agent.workflow import RequestGuard
from inquiry_analyst.errors import ModelRequestError, RequestInFlightError, StreamInterruptedError
from inquiry_analyst.models.schemas import TranscriptResponse
from inquiry_analyst.rendering.markdown import markdown_to_html, markdown_to_text
from inquiry_analyst.ui.api_client import (
    ApiError,
    procedure_turns,
    raise_for_status,
    stream_chat,
)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
REQUEST_TIMEOUT = httpx.Timeout(300.0, connect=10.0)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
    }

    .header { background: linear-gradient(135deg, #1e3a5f 0%, #2c5282 100%); }

    .message-user {
        background: #e8eef7;
        color: #1f2937;
        border-radius: 18px 18px 4px 18px;
    }

    .message-model {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-error { background: #fdecea; color: #8a1c1c; border-radius: 12px; }
    .message-incomplete { border-left: 4px solid #d97706; }

    .message-model h1, .message-model h2 { font-weight: 600; font-size: 1.15rem; }
    .message-model h3, .message-model h4 { font-weight: 600; }
    .message-model ul { list-style: disc; margin-left: 1.25rem; }
</style>
"""


@dataclass
class PageState:
    """Per-page state: the in-flight guard and the pending attachment."""

    guard: RequestGuard
    session_active: bool = False
    attachment_name: str | None = None
    attachment_content: bytes | None = None

    def clear_attachment(self) -> None:
        self.attachment_name = None
        self.attachment_content = None


@ui.page("/")
def chat_page() -> None:
    """Main analysis page."""
    ui.add_head_html(CUSTOM_CSS)
    state = PageState(guard=RequestGuard())

    pdf_upload: ui.upload
    subject_input: ui.textarea
    file_label: ui.label
    generate_btn: ui.button
    messages_container: ui.column
    follow_up_card: ui.column
    follow_up_input: ui.textarea
    attachment_label: ui.label
    attach_upload: ui.upload
    send_btn: ui.button

    def set_busy(busy: bool) -> None:
        for button in (generate_btn, send_btn):
            button.set_enabled(not busy)

    def render_user(text: str) -> None:
        with ui.row().classes("w-full justify-end"):
            with ui.element("div").classes("message-user px-4 py-3 max-w-[85%]"):
                ui.html(markdown_to_html(text), sanitize=False).classes("text-sm")

    def render_error(text: str) -> None:
        with ui.element("div").classes("message-error w-full px-4 py-3"):
            ui.label("Ocorreu um erro. Por favor, tente novamente.").classes("text-sm")
            ui.label(f"Detalhes: {text}").classes("text-xs")

    def add_copy_button(text: str) -> None:
        async def copy() -> None:
            ui.clipboard.write(markdown_to_text(text))
            ui.notify("Copiado!", type="positive")

        ui.button("Copiar", icon="content_copy", on_click=copy).props("flat dense size=sm")

    def render_transcript(transcript: TranscriptResponse) -> None:
        messages_container.clear()
        with messages_container:
            if not transcript.turns:
                ui.label("Aguardando dados para análise...").classes("text-gray-400")
            folded = procedure_turns(transcript.turns)
            for index, turn in enumerate(transcript.turns):
                if turn.role == "user":
                    if index in folded:
                        with ui.expansion("Procedimento enviado para análise").classes("w-full"):
                            ui.label(turn.text).classes("text-xs whitespace-pre-wrap")
                    else:
                        render_user(turn.text)
                elif turn.status == "error":
                    render_error(turn.error or "")
                else:
                    incomplete = "" if turn.status == "complete" else " message-incomplete"
                    with ui.column().classes(f"message-model w-full px-4 py-3{incomplete}"):
                        ui.html(turn.html, sanitize=False).classes("text-sm leading-relaxed")
                        if turn.error:
                            ui.label(f"Resposta incompleta: {turn.error}").classes(
                                "text-xs text-amber-700"
                            )
                        if turn.copyable:
                            add_copy_button(turn.text)
        follow_up_card.set_visibility(transcript.session_active)

    async def refresh() -> None:
        async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=REQUEST_TIMEOUT) as client:
            response = await client.get("/chat/transcript")
            response.raise_for_status()
            transcript = TranscriptResponse.model_validate(response.json())
        state.session_active = transcript.session_active
        render_transcript(transcript)

    async def stream_turn(path: str, **request_kwargs) -> bool:
        """POST to a chat endpoint and render the streamed answer.

        Returns True only when the answer arrived complete.
        """
        try:
            state.guard.acquire()
        except RequestInFlightError as e:
            ui.notify(str(e), type="warning")
            return False
        set_busy(True)

        with messages_container:
            with ui.column().classes("message-model w-full px-4 py-3") as bubble:
                output = ui.html("<em>Analisando... Por favor, aguarde.</em>", sanitize=False)
                output.classes("text-sm leading-relaxed")

        def render(text: str) -> None:
            output.set_content(markdown_to_html(text))

        completed = False
        try:
            async with httpx.AsyncClient(
                base_url=API_BASE_URL, timeout=REQUEST_TIMEOUT
            ) as client:
                await stream_chat(client, path, render, **request_kwargs)
            completed = True
        except StreamInterruptedError as e:
            ui.notify(f"Resposta interrompida: {e}", type="warning")
        except (ApiError, ModelRequestError) as e:
            bubble.delete()
            ui.notify(str(e), type="negative")
        except httpx.RequestError as e:
            bubble.delete()
            ui.notify(f"Falha de conexão: {e}", type="negative")
        finally:
            state.guard.release()
            set_busy(False)
        await refresh()
        return completed

    async def on_pdf_upload(e: events.UploadEventArguments) -> None:
        name = e.file.name
        file_label.set_text(f'Lendo "{name}"...')
        subject_input.value = "Extraindo texto do PDF, por favor aguarde..."
        generate_btn.disable()
        try:
            async with httpx.AsyncClient(
                base_url=API_BASE_URL, timeout=REQUEST_TIMEOUT
            ) as client:
                response = await client.post(
                    "/documents/extract",
                    files={"file": (name, await e.file.read(), "application/pdf")},
                )
                await raise_for_status(response)
            subject_input.value = response.json()["text"]
            file_label.set_text(f'Arquivo carregado: "{name}"')
        except (ApiError, httpx.RequestError) as error:
            file_label.set_text("Erro ao processar o PDF.")
            subject_input.value = f"Não foi possível extrair o texto do arquivo PDF. Detalhes: {error}"
            ui.notify("Ocorreu um erro ao processar o arquivo PDF.", type="negative")
        finally:
            generate_btn.enable()
            pdf_upload.reset()

    async def on_attachment_upload(e: events.UploadEventArguments) -> None:
        state.attachment_name = e.file.name
        state.attachment_content = await e.file.read()
        attachment_label.set_text(e.file.name)

    async def generate() -> None:
        text = subject_input.value or ""
        if not text.strip() or text.startswith("Extraindo texto"):
            ui.notify("Carregue um PDF ou insira o texto do inquérito para análise.", type="warning")
            return
        if state.session_active:
            ui.notify("Já existe uma análise. Use \"Nova análise\" para recomeçar.", type="warning")
            return
        await stream_turn("/chat/analysis", json={"subject_text": text})

    async def send_follow_up() -> None:
        instruction = (follow_up_input.value or "").strip()
        if not state.session_active:
            ui.notify("Gere uma análise inicial primeiro.", type="warning")
            return
        if not instruction and state.attachment_content is None:
            ui.notify("Insira uma mensagem ou anexe um arquivo para continuar.", type="warning")
            return

        files = None
        if state.attachment_content is not None:
            files = {
                "file": (state.attachment_name, state.attachment_content, "application/pdf")
            }
        # Kept for a retry unless the answer completed.
        if not await stream_turn(
            "/chat/follow-up", data={"instruction": instruction}, files=files
        ):
            return

        follow_up_input.value = ""
        state.clear_attachment()
        attachment_label.set_text("")
        attach_upload.reset()

    async def new_analysis() -> None:
        async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=REQUEST_TIMEOUT) as client:
            response = await client.post("/chat/reset")
        if response.status_code == 409:
            ui.notify(response.json().get("detail", ""), type="warning")
            return
        subject_input.value = ""
        file_label.set_text("Nenhum arquivo selecionado")
        await refresh()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container gap-0"),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            ui.label("Gerador de Análise de Inquéritos").classes(
                "text-lg font-semibold text-white"
            )
            ui.button("Nova análise", icon="add", on_click=new_analysis).props(
                "flat color=white"
            )

        with ui.column().classes("w-full p-5 gap-3"):
            with ui.row().classes("items-center gap-3"):
                pdf_upload = (
                    ui.upload(label="Carregar PDF", on_upload=on_pdf_upload, auto_upload=True)
                    .props("accept=.pdf flat bordered")
                    .classes("w-64")
                )
                file_label = ui.label("Nenhum arquivo selecionado").classes("text-sm text-gray-500")
            subject_input = (
                ui.textarea(
                    label="Cole aqui o conteúdo do procedimento inquisitorial:",
                    placeholder="Insira o texto do inquérito policial, TCO, etc...",
                )
                .props("outlined rows=8")
                .classes("w-full")
            )
            generate_btn = ui.button("Gerar Análise", on_click=generate).props("unelevated")

            ui.label("Análise e Chat").classes("text-base font-semibold mt-4")
            messages_container = ui.column().classes("w-full gap-4")

            with ui.column().classes("w-full gap-2") as follow_up_card:
                follow_up_input = (
                    ui.textarea(
                        label="Enviar nova mensagem ou pedido:",
                        placeholder=(
                            "Faça uma pergunta sobre a análise, solicite uma alteração ou "
                            "anexe um novo documento para complementar a análise..."
                        ),
                    )
                    .props("outlined autogrow")
                    .classes("w-full")
                )
                with ui.row().classes("items-center gap-3"):
                    attach_upload = (
                        ui.upload(
                            label="Anexar PDF", on_upload=on_attachment_upload, auto_upload=True
                        )
                        .props("accept=.pdf flat bordered dense")
                        .classes("w-56")
                    )
                    attachment_label = ui.label("").classes("text-sm text-gray-500")
                    send_btn = ui.button("Enviar", on_click=send_follow_up).props("unelevated")
            follow_up_card.set_visibility(False)

    ui.timer(0.1, refresh, once=True)


def main() -> None:
    ui.run(
        title="Gerador de Análise de Inquéritos",
        port=int(os.getenv("UI_PORT", "8080")),
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
