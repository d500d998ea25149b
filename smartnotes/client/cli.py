"""Cliente de terminal para Smart Notes.

Uso típico:
  smartnotes register --name Ana --email ana@example.com
  smartnotes login --email ana@example.com
  smartnotes add "Comprar pan y leche" --tags compras,casa
  smartnotes list --q pan --tag compras
  smartnotes edit <id> --text "Comprar pan" --tags compras
  smartnotes speak <id>
  smartnotes dictate --tags ideas

Sin sesión solo están disponibles register/login; con sesión, el resto.
"""
from __future__ import annotations

import argparse
import getpass
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from smartnotes.client.api import ApiClient, ApiError
from smartnotes.client.config import ClientSettings
from smartnotes.client.editor import NoteEditor, NoteFilter
from smartnotes.client.session import Session

AUTH_COMMANDS = {"register", "login"}


def _fmt_date(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone().strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return value


def print_note(n: Dict[str, Any]) -> None:
    print(f"[{n.get('_id')}] {_fmt_date(n.get('createdAt'))}")
    print(f"  {n.get('noteText', '')}")
    if n.get("tags"):
        print("  " + " ".join(f"#{t}" for t in n["tags"]))
    if n.get("summary"):
        print(f"  Summary: {n['summary']}")


def _find_note(api: ApiClient, note_id: str) -> Dict[str, Any]:
    for n in api.list_notes():
        if n.get("_id") == note_id:
            return n
    raise ApiError("Note not found", 404)


def _password(args: argparse.Namespace) -> str:
    return args.password or getpass.getpass("Password: ")


def cmd_register(args, api: ApiClient, session: Session) -> None:
    data = api.register(args.name, args.email, _password(args))
    session.save(data["token"], data["user"])
    print(f"Registrado como {data['user']['name']} <{data['user']['email']}>")


def cmd_login(args, api: ApiClient, session: Session) -> None:
    data = api.login(args.email, _password(args))
    session.save(data["token"], data["user"])
    print(f"Sesión iniciada: {data['user']['name']}")


def cmd_logout(args, api: ApiClient, session: Session) -> None:
    session.clear()
    print("Sesión cerrada")


def cmd_whoami(args, api: ApiClient, session: Session) -> None:
    u = session.user or {}
    print(f"{u.get('name')} <{u.get('email')}> id={u.get('id')}")


def cmd_list(args, api: ApiClient, session: Session) -> None:
    flt = NoteFilter(query=args.q or "", active_tag=args.tag or "")
    if args.all:
        flt.clear_tag()
    notes = api.list_notes(**flt.params())
    if not notes:
        print("Sin notas")
        return
    tags: List[str] = []
    for n in notes:
        for t in n.get("tags") or []:
            if t not in tags:
                tags.append(t)
    if tags:
        print("Tags: " + " ".join(f"#{t}" for t in tags[:8]) + "\n")
    for n in notes:
        print_note(n)
        print()


def cmd_add(args, api: ApiClient, session: Session) -> None:
    editor = NoteEditor(api=api, note_text=args.text or "", note_html=args.html or "")
    editor.commit_tag_input(args.tags or "")
    note = editor.save()
    if note is None:
        print("Nota vacía; nada que guardar", file=sys.stderr)
        return
    print_note(note)


def cmd_edit(args, api: ApiClient, session: Session) -> None:
    editor = NoteEditor(api=api)
    editor.start_edit(_find_note(api, args.id))
    if args.text is not None:
        editor.note_text = args.text
    if args.html is not None:
        editor.note_html = args.html
    if args.tags is not None:
        editor.tags = []
        editor.commit_tag_input(args.tags)
    note = editor.save()
    if note is not None:
        print_note(note)


def cmd_delete(args, api: ApiClient, session: Session) -> None:
    res = api.delete_note(args.id)
    print(res.get("message", "Deleted"))


def cmd_speak(args, api: ApiClient, session: Session) -> None:
    from smartnotes.client.speech import speak  # import lazy (extra `voice`)

    note = _find_note(api, args.id)
    if not note.get("summary"):
        print("La nota no tiene resumen", file=sys.stderr)
        return
    speak(note["summary"])


def cmd_dictate(args, api: ApiClient, session: Session, settings: ClientSettings) -> None:
    from smartnotes.client.speech import Dictation  # import lazy (extra `voice`)

    editor = NoteEditor(api=api)
    if args.id:
        editor.start_edit(_find_note(api, args.id))
    if args.tags:
        editor.commit_tag_input(args.tags)

    def _final(text: str) -> None:
        editor.on_final(text)
        print(f"\r{editor.note_text}")

    def _interim(text: str) -> None:
        editor.on_interim(text)
        if text:
            print(f"Listening… {text}", end="\r", flush=True)

    dictation = Dictation(lang=settings.speech_lang)
    dictation.start(_final, _interim)
    try:
        input("Dictando; Enter para terminar y guardar.\n")
    finally:
        dictation.stop()
    note = editor.save()
    if note is None:
        print("Nada dictado; no se guardó", file=sys.stderr)
        return
    print_note(note)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="smartnotes", description="Notas con resumen automático")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("register", help="Crear cuenta")
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--password", help="Si se omite, se pide por consola")

    p = sub.add_parser("login", help="Iniciar sesión")
    p.add_argument("--email", required=True)
    p.add_argument("--password", help="Si se omite, se pide por consola")

    sub.add_parser("logout", help="Cerrar sesión")
    sub.add_parser("whoami", help="Usuario de la sesión")

    p = sub.add_parser("list", help="Listar notas")
    p.add_argument("--q", help="Búsqueda de texto")
    p.add_argument("--tag", help="Filtrar por tag")
    p.add_argument("--all", action="store_true", help="Ignorar --tag (todas)")

    p = sub.add_parser("add", help="Crear nota")
    p.add_argument("text", nargs="?", default="")
    p.add_argument("--html", help="Versión enriquecida (HTML) de la nota")
    p.add_argument("--tags", help="Tags separados por coma")

    p = sub.add_parser("edit", help="Editar nota")
    p.add_argument("id")
    p.add_argument("--text")
    p.add_argument("--html")
    p.add_argument("--tags", help="Reemplaza los tags (separados por coma)")

    p = sub.add_parser("delete", help="Eliminar nota")
    p.add_argument("id")

    p = sub.add_parser("speak", help="Leer en voz alta el resumen de una nota")
    p.add_argument("id")

    p = sub.add_parser("dictate", help="Dictar una nota por micrófono")
    p.add_argument("--id", help="Seguir dictando sobre una nota existente")
    p.add_argument("--tags", help="Tags separados por coma")
    return ap


def main(argv: Optional[List[str]] = None, settings: Optional[ClientSettings] = None, http: Any = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or ClientSettings()
    session = Session.load(settings.session_file)

    if args.command not in AUTH_COMMANDS and not session.is_authenticated:
        print("No hay sesión; usa `smartnotes login` o `smartnotes register`", file=sys.stderr)
        return 1

    api = ApiClient(settings.api_base, token=session.token, http=http, timeout=settings.timeout_seconds)
    handlers = {
        "register": cmd_register,
        "login": cmd_login,
        "logout": cmd_logout,
        "whoami": cmd_whoami,
        "list": cmd_list,
        "add": cmd_add,
        "edit": cmd_edit,
        "delete": cmd_delete,
        "speak": cmd_speak,
    }
    try:
        if args.command == "dictate":
            cmd_dictate(args, api, session, settings)
        else:
            handlers[args.command](args, api, session)
    except ApiError as e:
        if e.status_code == 401 and session.is_authenticated:
            # Token vencido o inválido: vuelve a la vista de autenticación
            session.clear()
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
