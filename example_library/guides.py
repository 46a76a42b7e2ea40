"""Documentation pages shipped with the example library."""

from catalog import storydoc


GETTING_STARTED = """\
<h1>Getting started</h1>
<p>Every component below declares its stories next to its props.</p>
@[story:Examples/ExampleCard/Default]
<p>Cards accept tags:</p>
@[story:Examples/ExampleCard/Tagged]
"""

FORMS_OVERVIEW = """\
<h1>Forms</h1>
<p>Inputs are bound to reactive cells.</p>
@[story:Forms/Inputs/TextInput/Filled]
@[story:Forms/Inputs/TextInput/Missing]
"""

DESIGN_TOKENS = """\
<h1>Design tokens</h1>
<pre><code class="language-css">:root { --brand: #0055ff; }</code></pre>
"""


def guide_pages():
    return [
        storydoc("Examples", GETTING_STARTED),
        storydoc("Forms", FORMS_OVERVIEW),
        # A page with no components under it
        storydoc("Guides/Design Tokens", DESIGN_TOKENS),
    ]
