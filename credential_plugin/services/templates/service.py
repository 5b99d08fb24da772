"""
Template Generation Service.

Renders the Kotlin sources of the Google Credential Manager native module and
the React package that exposes it. Output is a pure function of the package
name: the same input always yields byte-identical text.
"""

from __future__ import annotations

from ...models.project import GeneratedFile

MODULE_CLASS_NAME = "GoogleCredentialModule"
PACKAGE_CLASS_NAME = "GoogleCredentialPackage"


def generate_module_source(package_name: str) -> str:
    """Generate GoogleCredentialModule.kt.

    The module exposes ``signIn(webClientId, promise)``. Each call requests a
    Google ID token bound to a fresh random nonce and settles the promise
    exactly once, either with the six profile fields or with a tagged error.

    Args:
        package_name: Kotlin package the module is declared in.

    Returns:
        Kotlin source text.
    """
    return f'''package {package_name}

import android.app.Activity
import android.content.Context
import androidx.credentials.CredentialManager
import androidx.credentials.CustomCredential
import androidx.credentials.GetCredentialRequest
import androidx.credentials.GetCredentialResponse
import androidx.credentials.exceptions.GetCredentialCancellationException
import androidx.credentials.exceptions.GetCredentialException
import androidx.credentials.exceptions.NoCredentialException
import com.facebook.react.bridge.Arguments
import com.facebook.react.bridge.Promise
import com.facebook.react.bridge.ReactApplicationContext
import com.facebook.react.bridge.ReactContextBaseJavaModule
import com.facebook.react.bridge.ReactMethod
import com.google.android.libraries.identity.googleid.GetGoogleIdOption
import com.google.android.libraries.identity.googleid.GoogleIdTokenCredential
import kotlinx.coroutines.CoroutineScope
import kotlinx.coroutines.Dispatchers
import kotlinx.coroutines.launch
import java.util.UUID

class {MODULE_CLASS_NAME}(reactContext: ReactApplicationContext) : ReactContextBaseJavaModule(reactContext) {{

    override fun getName(): String = "{MODULE_CLASS_NAME}"

    @ReactMethod
    fun signIn(webClientId: String, promise: Promise) {{
        val activity: Activity? = reactApplicationContext.currentActivity
        if (activity == null) {{
            promise.reject("NO_ACTIVITY", "No activity available")
            return
        }}

        // Fresh nonce per request, bound into the ID token for replay protection
        val nonce = UUID.randomUUID().toString()

        val googleIdOption = GetGoogleIdOption.Builder()
            .setServerClientId(webClientId)
            .setNonce(nonce)
            .setFilterByAuthorizedAccounts(false)
            .build()

        val request = GetCredentialRequest.Builder()
            .addCredentialOption(googleIdOption)
            .build()

        val credentialManager = CredentialManager.create(activity as Context)

        CoroutineScope(Dispatchers.Main).launch {{
            try {{
                val result = credentialManager.getCredential(
                    request = request,
                    context = activity as Context
                )
                handleSignInResult(result, promise)
            }} catch (e: GetCredentialCancellationException) {{
                promise.reject("SIGN_IN_CANCELLED", "User cancelled the sign-in")
            }} catch (e: NoCredentialException) {{
                promise.reject("NO_CREDENTIAL", "No credential available: ${{e.message}}")
            }} catch (e: GetCredentialException) {{
                promise.reject("CREDENTIAL_ERROR", "Credential error: ${{e.message}}")
            }} catch (e: Exception) {{
                promise.reject("UNKNOWN_ERROR", "Unknown error: ${{e.message}}")
            }}
        }}
    }}

    private fun handleSignInResult(result: GetCredentialResponse, promise: Promise) {{
        val credential = result.credential

        when (credential) {{
            is CustomCredential -> {{
                if (credential.type == GoogleIdTokenCredential.TYPE_GOOGLE_ID_TOKEN_CREDENTIAL) {{
                    try {{
                        val googleCredential = GoogleIdTokenCredential.createFrom(credential.data)

                        val response = Arguments.createMap().apply {{
                            putString("idToken", googleCredential.idToken)
                            putString("id", googleCredential.id)
                            putString("displayName", googleCredential.displayName)
                            putString("givenName", googleCredential.givenName)
                            putString("familyName", googleCredential.familyName)
                            putString("profilePictureUri", googleCredential.profilePictureUri?.toString())
                        }}

                        promise.resolve(response)
                    }} catch (e: Exception) {{
                        promise.reject("PARSE_ERROR", "Failed to parse Google credential: ${{e.message}}")
                    }}
                }} else {{
                    promise.reject("INVALID_CREDENTIAL_TYPE", "Unexpected credential type: ${{credential.type}}")
                }}
            }}
            else -> {{
                promise.reject("INVALID_CREDENTIAL", "Unexpected credential class: ${{credential.javaClass.name}}")
            }}
        }}
    }}
}}
'''


def generate_package_source(package_name: str) -> str:
    """Generate GoogleCredentialPackage.kt, the ReactPackage registering the module."""
    return f'''package {package_name}

import com.facebook.react.ReactPackage
import com.facebook.react.bridge.NativeModule
import com.facebook.react.bridge.ReactApplicationContext
import com.facebook.react.uimanager.ViewManager

class {PACKAGE_CLASS_NAME} : ReactPackage {{
    override fun createNativeModules(reactContext: ReactApplicationContext): List<NativeModule> {{
        return listOf({MODULE_CLASS_NAME}(reactContext))
    }}

    override fun createViewManagers(reactContext: ReactApplicationContext): List<ViewManager<*, *>> {{
        return emptyList()
    }}
}}
'''


def generate_sources(package_name: str) -> list[GeneratedFile]:
    """Render both generated files for a package."""
    return [
        GeneratedFile(
            file_name=MODULE_CLASS_NAME,
            package=package_name,
            content=generate_module_source(package_name),
        ),
        GeneratedFile(
            file_name=PACKAGE_CLASS_NAME,
            package=package_name,
            content=generate_package_source(package_name),
        ),
    ]
