"""
Limits shared by the recommendation pipeline and the bundle pages.

The widget renders a single row of at most six cards, and the model is asked
for four to six handles, so anything below four is padded from the fallback
list.
"""

# Candidates listed in the prompt
MAX_PROMPT_PRODUCTS = 20

# Truncation applied to descriptions embedded in the prompt
CURRENT_DESCRIPTION_MAX_CHARS = 300
CANDIDATE_DESCRIPTION_MAX_CHARS = 100

# Final recommendation set size
MAX_RECOMMENDATIONS = 6
MIN_RECOMMENDATIONS = 4

# Gemini generation parameters
GENERATION_TEMPERATURE = 0.7
GENERATION_TOP_K = 40
GENERATION_TOP_P = 0.95
GENERATION_MAX_OUTPUT_TOKENS = 1024

# Bundle metaobjects
BUNDLE_INDEX_PAGE_SIZE = 20

BUNDLE_TYPE_LABELS = {
    'percentage': 'Smart Saver',
    'fixed_price': 'Flat Price',
}
DEFAULT_BUNDLE_TYPE_LABEL = 'Custom Bundle'
DEFAULT_BUNDLE_TITLE = 'Untitled bundle'
