"""
Canonical file templates.

Placeholder content for the configuration files a framework needs. The
synthesizer writes these into a project when they are missing, and the
archive assembler renders the same Android manifest with the values the
extractors found. Output stays simple enough for the extractors' own
pattern search to read back.
"""

from __future__ import annotations

import json
from xml.sax.saxutils import escape

from ...models.analysis import BuildConfig, Framework


def _xml(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def android_manifest(
    package_name: str,
    app_name: str,
    version_name: str,
    min_sdk: int,
    target_sdk: int,
    version_code: int = 1,
) -> str:
    """Render an ``AndroidManifest.xml`` with a single launcher activity."""
    return f'''<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
    package="{_xml(package_name)}"
    android:versionCode="{version_code}"
    android:versionName="{_xml(version_name)}">

    <uses-sdk android:minSdkVersion="{min_sdk}"
              android:targetSdkVersion="{target_sdk}" />

    <uses-permission android:name="android.permission.INTERNET" />
    <uses-permission android:name="android.permission.ACCESS_NETWORK_STATE" />

    <application
        android:allowBackup="true"
        android:icon="@mipmap/ic_launcher"
        android:label="{_xml(app_name)}"
        android:theme="@style/AppTheme">

        <activity
            android:name=".MainActivity"
            android:exported="true"
            android:launchMode="singleTop"
            android:theme="@style/LaunchTheme">
            <intent-filter>
                <action android:name="android.intent.action.MAIN" />
                <category android:name="android.intent.category.LAUNCHER" />
            </intent-filter>
        </activity>
    </application>
</manifest>
'''


def manifest_for(build_config: BuildConfig, framework: Framework) -> str:
    """Render the Android manifest from a build config's values."""
    return android_manifest(
        package_name=build_config.resolved_package_name(framework),
        app_name=build_config.app_name,
        version_name=build_config.version,
        min_sdk=build_config.min_sdk,
        target_sdk=build_config.target_sdk,
    )


def app_build_gradle(build_config: BuildConfig, framework: Framework) -> str:
    """Render a module-level ``build.gradle``."""
    return f'''apply plugin: "com.android.application"

android {{
    compileSdkVersion {build_config.target_sdk}

    defaultConfig {{
        applicationId "{build_config.resolved_package_name(framework)}"
        minSdkVersion {build_config.min_sdk}
        targetSdkVersion {build_config.target_sdk}
        versionCode 1
        versionName "{build_config.version}"
    }}

    buildTypes {{
        release {{
            minifyEnabled false
            proguardFiles getDefaultProguardFile('proguard-android-optimize.txt'), 'proguard-rules.pro'
        }}
    }}
}}

dependencies {{
    implementation 'androidx.appcompat:appcompat:1.6.1'
    implementation 'com.google.android.material:material:1.9.0'
    implementation 'androidx.constraintlayout:constraintlayout:2.1.4'
}}
'''


def project_build_gradle() -> str:
    """Render a top-level ``build.gradle``."""
    return '''// Top-level build file where you can add configuration options common to all sub-projects/modules.
buildscript {
    repositories {
        google()
        mavenCentral()
    }
    dependencies {
        classpath 'com.android.tools.build:gradle:7.4.2'
    }
}

allprojects {
    repositories {
        google()
        mavenCentral()
    }
}
'''


def package_json(build_config: BuildConfig) -> str:
    """Render a React Native ``package.json``."""
    manifest = {
        "name": _slug(build_config.app_name, "-") or "mobile-app",
        "displayName": build_config.app_name,
        "version": build_config.version,
        "main": "index.js",
        "scripts": {
            "android": "react-native run-android",
            "ios": "react-native run-ios",
            "start": "react-native start",
        },
        "dependencies": {
            "react": "18.2.0",
            "react-native": "0.72.0",
        },
    }
    return json.dumps(manifest, indent=2) + "\n"


def config_xml(build_config: BuildConfig, framework: Framework) -> str:
    """Render a Cordova ``config.xml`` widget descriptor."""
    return f'''<?xml version='1.0' encoding='utf-8'?>
<widget id="{_xml(build_config.resolved_package_name(framework))}" version="{_xml(build_config.version)}" xmlns="http://www.w3.org/ns/widgets" xmlns:cdv="http://cordova.apache.org/ns/1.0">
    <name>{_xml(build_config.app_name)}</name>
    <description>
        A sample Apache Cordova application.
    </description>
    <content src="index.html" />
    <access origin="*" />
    <allow-intent href="http://*/*" />
    <allow-intent href="https://*/*" />
    <platform name="android">
        <allow-intent href="market:*" />
    </platform>
</widget>
'''


def pubspec_yaml(build_config: BuildConfig) -> str:
    """Render a Flutter ``pubspec.yaml``."""
    return f'''name: {_slug(build_config.app_name, "_") or "mobile_app"}
description: A new Flutter project.
publish_to: 'none'
version: {build_config.version}+1

environment:
  sdk: '>=3.0.0 <4.0.0'

dependencies:
  flutter:
    sdk: flutter
  cupertino_icons: ^1.0.2

flutter:
  uses-material-design: true
'''


def main_dart(build_config: BuildConfig) -> str:
    """Render a Flutter ``lib/main.dart`` entry point."""
    title = build_config.app_name.replace("\\", "\\\\").replace("'", "\\'")
    return f'''import 'package:flutter/material.dart';

void main() {{
  runApp(const MyApp());
}}

class MyApp extends StatelessWidget {{
  const MyApp({{super.key}});

  @override
  Widget build(BuildContext context) {{
    return MaterialApp(
      title: '{title}',
      home: const Scaffold(
        body: Center(child: Text('{title}')),
      ),
    );
  }}
}}
'''


def index_html(build_config: BuildConfig) -> str:
    """Render a web entry page for Cordova's ``www/index.html``."""
    return f'''<!DOCTYPE html>
<html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="initial-scale=1, width=device-width, viewport-fit=cover">
        <title>{_xml(build_config.app_name)}</title>
    </head>
    <body>
        <div class="app">
            <h1>{_xml(build_config.app_name)}</h1>
        </div>
        <script src="cordova.js"></script>
    </body>
</html>
'''


def _slug(text: str, separator: str) -> str:
    words = "".join(c.lower() if c.isalnum() else " " for c in text).split()
    return separator.join(words)
