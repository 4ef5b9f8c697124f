"""Unit tests for iplant_wiki.models module."""

from src.iplant_wiki.models import Comment, Page


class TestPage:
    """Test cases for Page."""

    def test_from_struct_converts_ids(self):
        """String IDs from XML-RPC become ints."""
        page = Page.from_struct({
            'id': '98765',
            'space': 'DOC',
            'title': 'Guide',
            'content': '<p>Hello</p>',
            'parentId': '111',
            'version': '4',
            'url': 'https://wiki.example.org/display/DOC/Guide',
        })

        assert page.page_id == 98765
        assert page.parent_id == 111
        assert page.version == 4
        assert page.url == 'https://wiki.example.org/display/DOC/Guide'

    def test_from_struct_without_parent(self):
        page = Page.from_struct({'id': '1', 'space': 'DOC', 'title': 'Home', 'parentId': '0'})
        assert page.parent_id == 0

        page = Page.from_struct({'id': '1', 'space': 'DOC', 'title': 'Home'})
        assert page.parent_id is None
        assert page.content == ''

    def test_new_page_struct_has_no_id(self):
        """A page without an ID is sent without id and version."""
        struct = Page(page_id=None, space='DOC', title='Guide', content='x', parent_id=111).to_struct()

        assert struct == {'space': 'DOC', 'title': 'Guide', 'content': 'x', 'parentId': '111'}

    def test_existing_page_struct_has_id_and_version(self):
        struct = Page(page_id=5, space='DOC', title='Guide', version=2).to_struct()

        assert struct['id'] == '5'
        assert struct['version'] == '2'
        assert 'parentId' not in struct


class TestComment:
    """Test cases for Comment."""

    def test_new_comment_struct(self):
        """A new comment carries the page ID and content only."""
        struct = Comment(page_id=98765, content='Nice page!').to_struct()

        assert struct == {'content': 'Nice page!', 'pageId': '98765'}

    def test_edit_comment_struct(self):
        struct = Comment(comment_id=42, url='https://wiki.example.org', content='Updated').to_struct()

        assert struct == {'content': 'Updated', 'id': '42', 'url': 'https://wiki.example.org'}

    def test_from_struct(self):
        comment = Comment.from_struct({
            'id': '42',
            'pageId': '98765',
            'content': 'Nice page!',
            'title': 'Re: Guide',
            'creator': 'de-service',
        })

        assert comment.comment_id == 42
        assert comment.page_id == 98765
        assert comment.content == 'Nice page!'
        assert comment.creator == 'de-service'
