APP_TITLE = "গ্রামজিপিটি"
APP_TAGLINE = "আপনার গ্রামীণ বন্ধু।"

SUGGESTIONS: tuple[str, ...] = (
    "আজকের আবহাওয়া কেমন?",
    "গ্রামের একটি সুন্দর গল্প বলো",
    "ধানক্ষেতের একটি ছবি আঁকো",
    "ফসলের রোগ নির্ণয় করতে সাহায্য করো",
)

USER_LABEL = "আপনি"
MODEL_LABEL = APP_TITLE
IMAGE_PLACEHOLDER = "[ছবি: {mime_type}]"
EMPTY_HISTORY = "এখনো কোনো কথোপকথন হয়নি।"
INVALID_SUGGESTION = "সঠিক নম্বর দিন: /suggest 1 থেকে /suggest {count}"


def welcome_message() -> str:
    numbered = "\n".join(
        f"{index}. {text}" for index, text in enumerate(SUGGESTIONS, start=1)
    )
    return (
        f"**{APP_TITLE}**\n"
        f"{APP_TAGLINE}\n\n"
        "এখানে আপনার প্রশ্ন লিখুন বা ছবি যোগ করুন...\n\n"
        f"{numbered}\n\n"
        "একটি প্রস্তাব পাঠাতে লিখুন: /suggest <নম্বর>\n"
        "পুরো কথোপকথন দেখতে: /history"
    )
