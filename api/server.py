"""server.py
Server to launch a FastAPI / Swagger UI instance driving one PageFlowController.

The server is single-session: it holds one controller for the local user, in
the same way the browser app holds one page state.
"""
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from follio.context import AppContext
from follio.exceptions import (
    AuthError,
    FileTooLargeError,
    InvalidFieldValueError,
    PersistenceError,
    UnknownFieldError,
    UnknownSectionError,
    UnsupportedFileTypeError,
)
from follio.flow.helpers.check_file_acceptance import check_file_acceptance
from follio.flow.page_flow_controller import PageFlowController
from follio.models import UploadedFile


class CredentialsInput(BaseModel):
    email: str
    password: str


class ProviderInput(BaseModel):
    provider: str


class FieldUpdateInput(BaseModel):
    """Update of a single text field (profile, education)."""
    field: str
    value: str


class ExperienceUpdateInput(BaseModel):
    """Experience update; `highlights` takes a list of strings."""
    field: str
    value: Union[str, List[str]]


class SkillInput(BaseModel):
    text: str


def serialize_state(controller: PageFlowController) -> Dict[str, Any]:
    """Return the JSON view of the controller's session."""
    state = controller.session_state()
    selected = state.selected_file
    return {
        "page": state.page,
        "identity": (
            {"id": state.identity.id, "email": state.identity.email, "name": state.identity.name}
            if state.identity else None
        ),
        "selected_file": (
            {"name": selected.name, "media_type": selected.media_type, "size_bytes": selected.size_bytes}
            if selected else None
        ),
        "document": state.document.to_dict() if state.document else None,
        "visibility": dict(controller.editor.visibility) if controller.editor else None,
        "pending": controller.pending_actions(),
    }


def create_app(context: Optional[AppContext] = None, **controller_kwargs) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        context (AppContext | None): Collaborators to use. Defaults to an
            AppContext built from the environment.
        **controller_kwargs: Forwarded to `AppContext.new_controller`.
    """
    app_context = context or AppContext()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_context.open()
        app.state.controller = app_context.new_controller(**controller_kwargs)
        await app.state.controller.start()
        yield
        app_context.close()

    app = FastAPI(title="Follio Resume Profile API", version="1.0", lifespan=lifespan)

    # ---- Error mapping ----
    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(UnsupportedFileTypeError)
    async def unsupported_file_handler(request: Request, exc: UnsupportedFileTypeError):
        return JSONResponse(status_code=415, content={"detail": str(exc)})

    @app.exception_handler(FileTooLargeError)
    async def file_too_large_handler(request: Request, exc: FileTooLargeError):
        return JSONResponse(status_code=413, content={"detail": str(exc)})

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(UnknownFieldError)
    @app.exception_handler(InvalidFieldValueError)
    @app.exception_handler(UnknownSectionError)
    async def unknown_name_handler(request: Request, exc: ValueError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    def controller_of(request: Request) -> PageFlowController:
        return request.app.state.controller

    def accepted(controller: PageFlowController, moved: bool) -> Dict[str, Any]:
        if not moved:
            raise HTTPException(
                status_code=409,
                detail=f"Action not allowed on page '{controller.page}'.",
            )
        return serialize_state(controller)

    def editor_of(request: Request):
        controller = controller_of(request)
        if controller.editor is None:
            raise HTTPException(status_code=409, detail="No document is being reviewed.")
        return controller.editor

    # ---- Session ----
    @app.get("/session", summary="Current page and session state")
    async def get_session(request: Request):
        return serialize_state(controller_of(request))

    # ---- Login ----
    @app.post("/login", summary="Sign in with email and password")
    async def sign_in(request: Request, credentials: CredentialsInput):
        controller = controller_of(request)
        return accepted(controller, await controller.sign_in(credentials.email, credentials.password))

    @app.post("/signup", summary="Create an account with email and password")
    async def sign_up(request: Request, credentials: CredentialsInput):
        controller = controller_of(request)
        return accepted(controller, await controller.sign_up(credentials.email, credentials.password))

    @app.post("/login/provider", summary="Start a social sign in")
    async def sign_in_with_provider(request: Request, body: ProviderInput):
        controller = controller_of(request)
        url = await controller.sign_in_with_provider(body.provider)
        if url is None:
            raise HTTPException(status_code=409, detail=f"Action not allowed on page '{controller.page}'.")
        return {"url": url}

    # ---- Upload ----
    @app.post(
        "/upload",
        summary="Select a resume file",
        description="Uploads a resume (PDF, DOC or DOCX) and selects it for parsing.",
    )
    async def upload(request: Request, file: UploadFile = File(...)):
        controller = controller_of(request)
        if controller.page == "upload" and file.size is not None:
            # Reject on the declared type and size before reading the body
            check_file_acceptance(
                UploadedFile(
                    name=file.filename or "",
                    media_type=file.content_type or "",
                    size_bytes=file.size,
                ),
                controller.accepted_media_types,
                controller.max_file_size_bytes,
            )
        contents = await file.read()
        uploaded = UploadedFile.from_bytes(
            name=file.filename or "",
            media_type=file.content_type or "",
            content=contents,
        )
        return accepted(controller, controller.select_file(uploaded))

    @app.delete("/upload", summary="Forget the selected file")
    async def clear_upload(request: Request):
        controller = controller_of(request)
        return accepted(controller, controller.clear_file())

    @app.post("/parse", summary="Parse the selected file and open review")
    async def parse(request: Request):
        controller = controller_of(request)
        return accepted(controller, await controller.confirm_parse())

    # ---- Review ----
    @app.patch("/review/profile", summary="Update one profile field")
    async def update_profile(request: Request, body: FieldUpdateInput):
        editor_of(request).set_profile_field(body.field, body.value)
        return serialize_state(controller_of(request))

    @app.post("/review/experience", summary="Add an experience entry")
    async def add_experience(request: Request):
        entry_id = editor_of(request).add_experience()
        return {"id": entry_id, **serialize_state(controller_of(request))}

    @app.patch("/review/experience/{entry_id}", summary="Update an experience entry")
    async def update_experience(request: Request, entry_id: str, body: ExperienceUpdateInput):
        editor_of(request).update_experience(entry_id, body.field, body.value)
        return serialize_state(controller_of(request))

    @app.delete("/review/experience/{entry_id}", summary="Remove an experience entry")
    async def remove_experience(request: Request, entry_id: str):
        editor_of(request).remove_experience(entry_id)
        return serialize_state(controller_of(request))

    @app.post("/review/education", summary="Add an education entry")
    async def add_education(request: Request):
        entry_id = editor_of(request).add_education()
        return {"id": entry_id, **serialize_state(controller_of(request))}

    @app.patch("/review/education/{entry_id}", summary="Update an education entry")
    async def update_education(request: Request, entry_id: str, body: FieldUpdateInput):
        editor_of(request).update_education(entry_id, body.field, body.value)
        return serialize_state(controller_of(request))

    @app.delete("/review/education/{entry_id}", summary="Remove an education entry")
    async def remove_education(request: Request, entry_id: str):
        editor_of(request).remove_education(entry_id)
        return serialize_state(controller_of(request))

    @app.post("/review/skills", summary="Add a skill")
    async def add_skill(request: Request, body: SkillInput):
        editor_of(request).add_skill(body.text)
        return serialize_state(controller_of(request))

    @app.delete("/review/skills/{index}", summary="Remove the skill at a position")
    async def remove_skill(request: Request, index: int):
        editor_of(request).remove_skill_at(index)
        return serialize_state(controller_of(request))

    @app.post("/review/sections/{name}/toggle", summary="Expand or collapse a section")
    async def toggle_section(request: Request, name: str):
        editor_of(request).toggle_section(name)
        return serialize_state(controller_of(request))

    @app.post("/review/commit", summary="Save the reviewed document")
    async def commit(request: Request):
        controller = controller_of(request)
        return accepted(controller, await editor_of(request).commit())

    @app.post("/review/back", summary="Discard the document and return to upload")
    async def back(request: Request):
        controller = controller_of(request)
        return accepted(controller, controller.back())

    # ---- Dashboard ----
    @app.get("/dashboard", summary="Saved profile with section counts")
    async def dashboard(request: Request):
        controller = controller_of(request)
        summary = controller.dashboard_summary()
        if summary is None:
            raise HTTPException(status_code=404, detail="No profile data found. Please upload and parse your resume first.")
        return summary

    @app.post("/dashboard/edit", summary="Reopen the saved document for editing")
    async def edit_profile(request: Request):
        controller = controller_of(request)
        return accepted(controller, controller.edit_profile())

    @app.post("/logout", summary="Sign out and clear the session")
    async def logout(request: Request):
        controller = controller_of(request)
        return accepted(controller, await controller.logout())

    return app


app = create_app()
