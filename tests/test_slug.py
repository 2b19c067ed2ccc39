"""Unit tests for app.services.slug.slugify."""

import unittest

from app.services.slug import slugify


class TestSlugify(unittest.TestCase):
    def test_plain_title(self) -> None:
        self.assertEqual(slugify("Meu Primeiro Post"), "meu-primeiro-post")

    def test_accents_removed(self) -> None:
        self.assertEqual(slugify("Post com Título Acentuado"), "post-com-titulo-acentuado")
        self.assertEqual(slugify("Ação e Reação"), "acao-e-reacao")

    def test_special_characters_dropped(self) -> None:
        self.assertEqual(slugify("Hello, World! (2026)"), "hello-world-2026")

    def test_hyphens_collapsed_and_trimmed(self) -> None:
        self.assertEqual(slugify("  --Hello   --  World--  "), "hello-world")

    def test_only_symbols_gives_empty_slug(self) -> None:
        self.assertEqual(slugify("!!!"), "")


if __name__ == "__main__":
    unittest.main()
