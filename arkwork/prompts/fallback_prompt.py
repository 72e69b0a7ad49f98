# Role: Canned reply for the empty-input fast path. Used instead of calling Gemini when the latest
# user message is blank, so the user still learns what the assistant can do.

from __future__ import annotations

GREETING_MESSAGE = (
    "Halo! Saya ArkWork Agent. Saya bisa bantu ringkas berita migas, rekomendasi kerja, "
    'dan konsultasi langkah praktis. Coba: "Berita LNG Indonesia terbaru dalam 3 poin."'
)


def build_greeting() -> str:
    return GREETING_MESSAGE
