"""
Preset reasons for rejecting a submission outright.

Staff pick one of these when force-rejecting; see
:meth:`.core.ActionExecutor.reject_with_template`. Each template knows what
to say to the author and where to say it.
"""

from types import MappingProxyType
from typing import Mapping, Optional, List, Tuple

from .domain.template import RejectionTemplate
from .exceptions import TemplateNotFound

PUBLIC = RejectionTemplate.Location.PUBLIC
THREAD = RejectionTemplate.Location.THREAD
NONE = RejectionTemplate.Location.NONE

AUTHOR_LEFT = 'author-left'


def _template(key: str, label: str, text: str,
              location: RejectionTemplate.Location = THREAD,
              allow_from_error: bool = False) -> RejectionTemplate:
    return RejectionTemplate(
        key=key,
        label=label,
        generate=lambda user, name: text.format(user=user, name=name),
        location=location,
        allow_from_error=allow_from_error
    )


TEMPLATES: Mapping[str, RejectionTemplate] = MappingProxyType({
    template.key: template for template in [
        _template(
            'no-license', 'No license',
            '{user}, your project has been rejected because it does not'
            ' contain a valid LICENSE, LICENSE.txt or LICENSE.md file. Please'
            ' add a license to your project and let us know so we can process'
            ' your submission. See <https://choosealicense.com/> for more'
            ' information.'
        ),
        _template(
            'invalid-license',
            'Invalid license (Non OSI / not immediately visible)',
            '{user}, your project has been rejected because it contains a'
            ' non-OSI license or the license is not immediately visible in the'
            ' root of the project. Please use an OSI license in a file called'
            ' LICENSE, LICENSE.txt or LICENSE.md and then let us know so we'
            ' can process your submission. See <https://choosealicense.com/>'
            ' for more information.'
        ),
        _template(
            'inaccessible-repository', 'Inaccessible repository',
            '{user}, your project has been rejected because the provided'
            ' repository link could not be accessed. Please double check the'
            ' URL, privacy settings and account information, then provide us'
            ' with a URL so we can process your submission.',
            allow_from_error=True
        ),
        _template(
            'empty-repository', 'Empty repository',
            '{user}, your project has been rejected because the provided'
            ' repository was empty. Please double check the URL and account'
            ' information, then provide us with a URL so we can process your'
            ' submission.'
        ),
        _template(
            'invalid-repository', 'Invalid link (Not GitHub or GitLab)',
            '{user}, your project has been rejected because the provided link'
            ' did not point to a valid GitHub or GitLab repository. Please'
            ' double check the URL and account information, then provide us'
            ' with a URL so we can process your submission.',
            allow_from_error=True
        ),
        _template(
            'invalid-id', 'Invalid user ID',
            'To whomever submitted "{name}", the provided ID was invalid.'
            ' Please provide us with your ID so we can process your'
            ' submission.',
            location=PUBLIC,
            allow_from_error=True
        ),
        _template(
            'plagiarism', 'Plagiarism',
            '{user}, your project has been rejected because it is blatant'
            ' plagiarism. Do not resubmit and do not submit plagiarised'
            ' projects again.'
        ),
        _template(
            'ad', 'Advertisement',
            '{user}, your project has been rejected because it is an'
            ' advertisement for another service or platform, which goes'
            ' against our policy on advertisements. Do not resubmit this'
            ' project.'
        ),
        # The author is gone, so nobody is told.
        _template(AUTHOR_LEFT, 'Author left the community', '',
                  location=NONE, allow_from_error=True),
    ]
})
"""Rejection templates, by key."""


class RejectionTemplateRouter:
    """Keyed lookup of :class:`.RejectionTemplate` instances."""

    def __init__(self, templates: Optional[Mapping[str, RejectionTemplate]]
                 = None) -> None:
        if templates is None:
            templates = TEMPLATES
        self._templates = MappingProxyType(dict(templates))

    def __contains__(self, key: str) -> bool:
        return key in self._templates

    def lookup_by_key(self, key: str) -> Optional[RejectionTemplate]:
        """Get the template for ``key``, or ``None`` if there is none."""
        return self._templates.get(key)

    def get(self, key: str) -> RejectionTemplate:
        """
        Get the template for ``key``.

        Raises
        ------
        :class:`.TemplateNotFound`
            If there is no template for ``key``.

        """
        template = self.lookup_by_key(key)
        if template is None:
            raise TemplateNotFound(key)
        return template

    def choices(self) -> List[Tuple[str, str]]:
        """(label, key) pairs, e.g. for building a command option list."""
        return [(template.label, template.key)
                for template in self._templates.values()]
