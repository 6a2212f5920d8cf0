"""Default stop words: English function words plus page-chrome noise seen in traffic."""

STOP_WORDS: frozenset[str] = frozenset({
    # Determiners, articles, conjunctions and prepositions
    "a", "an", "the", "and", "or", "but", "if", "nor", "so", "than", "then",
    "about", "above", "after", "again", "against", "at", "as", "before",
    "below", "between", "by", "down", "during", "for", "from", "further",
    "in", "into", "of", "off", "on", "once", "out", "over", "through", "to",
    "under", "until", "up", "with", "while", "because",
    # Pronouns
    "i", "me", "my", "myself", "we", "us", "our", "ours", "ourselves",
    "you", "your", "yours", "yourself", "yourselves",
    "he", "him", "his", "himself", "she", "her", "hers", "herself",
    "it", "its", "itself", "they", "them", "their", "theirs", "themselves",
    "this", "that", "these", "those",
    "what", "which", "who", "whom", "why", "how", "when", "where",
    # Be/have/do forms and modals
    "am", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "having", "do", "does", "did", "doing",
    "will", "would", "should", "could", "can", "cannot", "ought",
    # Contractions
    "aren't", "can't", "couldn't", "didn't", "doesn't", "don't", "hadn't",
    "hasn't", "haven't", "he'd", "he'll", "he's", "here's", "how's", "i'd",
    "i'll", "i'm", "i've", "isn't", "it's", "let's", "mustn't", "shan't",
    "she'd", "she'll", "she's", "shouldn't", "that's", "there's", "they'd",
    "they'll", "they're", "they've", "wasn't", "we'd", "we'll", "we're",
    "we've", "weren't", "what's", "when's", "where's", "who's", "why's",
    "won't", "wouldn't", "you'd", "you'll", "you're", "you've",
    # Quantifiers and other function words
    "all", "any", "both", "each", "few", "more", "most", "other", "some",
    "such", "no", "not", "only", "own", "same", "too", "very", "here",
    "there",
    # High-frequency filler
    "just", "now", "one", "like", "get", "time", "new", "use", "make",
    "made", "see", "way", "day", "go", "come", "back", "many", "much",
    "good", "know", "think", "take", "people", "year", "say", "well",
    "work", "want", "also", "even",
    # UI / navigation chrome
    "follow", "subscribe", "full", "coverage", "text", "courier", "journal",
    "report", "news", "times", "hour", "hours", "view", "views", "sync",
    "user", "user sync", "full coverage", "opinion", "yesterday", "days",
    "https", "http", "www", "com", "privacy", "show", "less", "show more",
    "show less", "last", "chat", "message", "select", "last message",
    "container", "safeframe", "container safeframe", "browser",
    "preferences", "icon", "comment", "comments", "advertisement",
    # Site boilerplate
    "x27", "amp", "quot", "video", "business", "best", "newsletters",
    "world", "read", "learn", "deals", "help", "watch", "shop", "stories",
    "ago", "games", "images", "sign", "policy", "free", "save", "live",
    "top", "courses", "support", "find", "explore", "week", "podcasts",
    "getty", "000", "travel", "home", "min", "rights", "reserved", "menu",
    "search", "login", "terms",
})
