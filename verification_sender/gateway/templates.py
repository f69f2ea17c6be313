"""Verification message texts, one per known client parsing quirk."""

# iOS clients pick the code out of the deep link, so it appears twice
SMS_IOS_VERIFICATION_TEXT = "Your verification code: {code}\n\nOr tap: verify://code/{code}"

# Android SMS Retriever needs the <#> prefix and the app hash suffix
ANDROID_APP_HASH = "doDiFGKPO1r"
SMS_ANDROID_NG_VERIFICATION_TEXT = "<#> Your verification code: {code}\n\n" + ANDROID_APP_HASH

SMS_VERIFICATION_TEXT = "Your verification code: {code}"

VOICE_VERIFICATION_TEXT = "Your verification code is: {code}"

CLIENT_TYPE_IOS = "ios"
CLIENT_TYPE_ANDROID_NG = "android-ng"


def sms_text(code: str, client_type: str | None = None) -> str:
    """Pick the SMS template for a client type hint; unknown hints get the generic one."""
    if client_type == CLIENT_TYPE_IOS:
        return SMS_IOS_VERIFICATION_TEXT.format(code=code)
    if client_type == CLIENT_TYPE_ANDROID_NG:
        return SMS_ANDROID_NG_VERIFICATION_TEXT.format(code=code)
    return SMS_VERIFICATION_TEXT.format(code=code)


def voice_text(code: str) -> str:
    return VOICE_VERIFICATION_TEXT.format(code=code)
